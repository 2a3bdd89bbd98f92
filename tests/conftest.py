"""
Pytest configuration and shared fixtures.
"""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest


@pytest.fixture
def canvas():
    """Default 800x600 canvas."""
    from scisim.core.simulation import CanvasConfig
    return CanvasConfig()


@pytest.fixture
def small_canvas():
    """Small canvas for the grid-heavy wave scenarios."""
    from scisim.core.simulation import CanvasConfig
    return CanvasConfig(width=300, height=240)


@pytest.fixture
def catalog():
    """The built-in scenario catalog."""
    from scisim.scenarios import default_catalog
    return default_catalog()


@pytest.fixture
def ax():
    """A fresh Agg axes, closed after the test."""
    import matplotlib.pyplot as plt
    fig, ax = plt.subplots()
    yield ax
    plt.close(fig)


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)
