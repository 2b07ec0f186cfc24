"""
Pytest configuration and fixtures
"""
import os
import sys

import numpy as np
import pytest

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)


@pytest.fixture
def palette():
    """The shared Gruvbox palette"""
    from gruvstyle.palette_data import default_palette
    return default_palette()


@pytest.fixture
def rng():
    """Seeded generator for reproducible noise"""
    return np.random.default_rng(1234)


@pytest.fixture
def random_image():
    """Small deterministic RGB buffer with varied colours"""
    gen = np.random.default_rng(0)
    return gen.integers(0, 256, size=(24, 32, 3), dtype=np.uint8)


@pytest.fixture
def tall_image():
    """Tall enough to be split across worker threads"""
    gen = np.random.default_rng(5)
    return gen.integers(0, 256, size=(200, 12, 3), dtype=np.uint8)


@pytest.fixture
def grey_image():
    """Flat mid-grey image"""
    return np.full((8, 10, 3), 100, dtype=np.uint8)
