"""
Shared pytest fixtures for PyColorCode tests
"""

import tempfile
from pathlib import Path

import numpy as np
import pytest

from colorcode.core.palette import Palette


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def default_palette():
    return Palette.default()


@pytest.fixture
def custom_palette():
    """A palette with every channel of every color distinct from the defaults"""
    return Palette({
        'Hat': (0x123456, 0x0A1B2C),
        'Hair': (0x010203, 0x000001),
        'Gloves': (0xFEDCBA, 0x7F6E5D),
        'Overall': (0x00FF00, 0x008000),
        'Shoes': (0xABCDEF, 0x556677),
        'Face': (0xFFFFFF, 0x000000),
    })


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
