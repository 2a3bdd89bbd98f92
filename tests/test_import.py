"""Basic import tests to verify package structure."""


def test_import_scisim():
    """Verify main package imports."""
    import scisim
    assert scisim.__version__ == "0.1.0"


def test_import_core():
    """Verify core module structure exists."""
    from scisim import core
    assert hasattr(core, "__doc__")
    assert hasattr(core, "SimulationDriver")


def test_import_motion():
    """Verify motion module structure exists."""
    from scisim import motion
    assert hasattr(motion, "FreeFallSimulation")


def test_import_waves():
    """Verify waves module structure exists."""
    from scisim import waves
    assert hasattr(waves, "WaveDiffractionSimulation")


def test_import_chemistry():
    """Verify chemistry module structure exists."""
    from scisim import chemistry
    assert hasattr(chemistry, "__doc__")


def test_import_analysis():
    """Verify analysis module structure exists."""
    from scisim import analysis
    assert hasattr(analysis, "__doc__")


def test_import_viz():
    """Verify viz module structure exists."""
    from scisim import viz
    assert hasattr(viz, "plot_field")
