"""
Material Skinner for PyColorCode
Maps palette slots onto named materials of a model scene

The scene itself comes from whatever 3D viewer hosts the editor. It only
has to expose its meshes through either `named_materials()` (an iterable
of materials) or `traverse(callback)` (called with every node; nodes with
a `material` attribute are meshes).
"""

from colorcode.utils.logging_config import get_logger


logger = get_logger(__name__)

DEFAULT_EMISSIVE_INTENSITY = 0.3


class MaterialDescription:
    """Lambert material settings for one slot: base color, emissive color and intensity"""

    def __init__(self, name, color, emissive, emissive_intensity=DEFAULT_EMISSIVE_INTENSITY):
        self.name = name
        self.color = color
        self.emissive = emissive
        self.emissive_intensity = emissive_intensity

    def __eq__(self, other):
        if not isinstance(other, MaterialDescription):
            return NotImplemented
        return (self.name, self.color, self.emissive, self.emissive_intensity) == \
            (other.name, other.color, other.emissive, other.emissive_intensity)

    def __repr__(self):
        return (f"MaterialDescription({self.name!r}, color={self.color:#08x}, "
                f"emissive={self.emissive:#08x}, intensity={self.emissive_intensity})")


def for_each_named_material(scene, visitor):
    """Call visitor(material) for every mesh material in the scene that has a name"""
    if hasattr(scene, 'named_materials'):
        materials = scene.named_materials()
    else:
        materials = []
        scene.traverse(lambda node: materials.append(getattr(node, 'material', None)))

    for material in materials:
        if material is not None and getattr(material, 'name', None):
            visitor(material)


def describe_material(name, palette, emissive_intensity=DEFAULT_EMISSIVE_INTENSITY):
    """Material settings for a slot name, None if the name is not a palette slot"""
    if name not in palette:
        return None
    slot = palette[name]
    return MaterialDescription(name, slot.ambient, slot.primary, emissive_intensity)


def apply_palette(scene, palette, apply, emissive_intensity=DEFAULT_EMISSIVE_INTENSITY):
    """
    Re-skin every material whose name matches a palette slot

    Args:
        scene: scene exposing named_materials() or traverse()
        palette: Palette to apply
        apply: callable(material, MaterialDescription) doing the viewer-side update
        emissive_intensity: emissive strength passed to every material

    Returns:
        int: number of materials updated
    """
    updated = []

    def visit(material):
        description = describe_material(material.name, palette, emissive_intensity)
        if description is not None:
            apply(material, description)
            updated.append(material.name)

    for_each_named_material(scene, visit)
    logger.debug(f"Re-skinned {len(updated)} materials: {updated}")
    return len(updated)
