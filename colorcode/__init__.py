"""
PyColorCode - character color editor with GameShark code export
"""

__version__ = '1.0.0'
