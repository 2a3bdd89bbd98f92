"""
The built-in scenario catalog, in selector order.
"""

from scisim.core.registry import Scenario, ScenarioCatalog
from scisim.motion import (
    CollisionSimulation,
    FreeFallSimulation,
    InclinedPlaneSimulation,
    PendulumSimulation,
    ProjectileSimulation,
)
from scisim.waves import (
    SingleWaveSimulation,
    WaveDiffractionSimulation,
    WaveInterferenceSimulation,
    WaveReflectionSimulation,
)

MOTION_SIMULATIONS = [
    FreeFallSimulation,
    ProjectileSimulation,
    PendulumSimulation,
    CollisionSimulation,
    InclinedPlaneSimulation,
]

WAVE_SIMULATIONS = [
    SingleWaveSimulation,
    WaveInterferenceSimulation,
    WaveReflectionSimulation,
    WaveDiffractionSimulation,
]


def default_catalog() -> ScenarioCatalog:
    """All nine scenarios: five motion, then four wave."""
    catalog = ScenarioCatalog()
    for group, classes in (("motion", MOTION_SIMULATIONS), ("waves", WAVE_SIMULATIONS)):
        for cls in classes:
            catalog.register(Scenario(id=cls.scenario_id, title=cls.title, factory=cls, group=group))
    return catalog
