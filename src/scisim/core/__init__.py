"""
Core primitives shared by every scenario.

This layer knows nothing about particular physics. It provides:
- Parameter specs and the bounded parameter set behind the sliders
- The Simulation lifecycle contract (reset/start/stop/update/draw)
- Closed-form wave field superposition on a sampled grid
- The frame driver owning the one active simulation
- Frame-driven tweens/timers and a size-bucketed resource pool
"""

from scisim.core.parameters import ParameterSpec, ParameterSet
from scisim.core.simulation import (
    TIME_STEP,
    CanvasConfig,
    DisplayDatum,
    EnergyReport,
    Simulation,
)
from scisim.core.field import PointSource, WaveGrid, attenuation, superpose, wave_color
from scisim.core.animation import Animator, Easing, tween
from scisim.core.pool import ResourcePool
from scisim.core.registry import Scenario, ScenarioCatalog
from scisim.core.driver import (
    PAUSE_LABEL,
    START_LABEL,
    ActiveSimulation,
    SimulationDriver,
)

__all__ = [
    "ParameterSpec",
    "ParameterSet",
    "TIME_STEP",
    "CanvasConfig",
    "DisplayDatum",
    "EnergyReport",
    "Simulation",
    "PointSource",
    "WaveGrid",
    "attenuation",
    "superpose",
    "wave_color",
    "Animator",
    "Easing",
    "tween",
    "ResourcePool",
    "Scenario",
    "ScenarioCatalog",
    "PAUSE_LABEL",
    "START_LABEL",
    "ActiveSimulation",
    "SimulationDriver",
]
