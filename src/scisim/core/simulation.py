"""
The simulation lifecycle shared by every scenario.

A Simulation owns three things exclusively:
- a ParameterSet seeded from define_parameters()
- its physical state (vectors, angles, bodies, sampled fields)
- a simulation clock advanced by a fixed timestep

The host calls update() then draw(ax) once per frame. update() is a no-op
while stopped; draw() only reads state. Display rows are derived from the
state after every change and are never a source of truth.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from scisim.core.parameters import ParameterSet, ParameterSpec

if TYPE_CHECKING:
    from matplotlib.axes import Axes

logger = logging.getLogger(__name__)

TIME_STEP = 0.016  # One frame at ~60 Hz


@dataclass(frozen=True)
class CanvasConfig:
    """Drawing surface size in pixels (y grows downward)."""

    width: int = 800
    height: int = 600

    @property
    def center(self) -> tuple[float, float]:
        return self.width / 2, self.height / 2


@dataclass(frozen=True)
class DisplayDatum:
    """One row of the data readout."""

    key: str  # Stable lookup key
    name: str  # Label shown to the user
    value: str  # Already formatted
    unit: str = ""


@dataclass(frozen=True)
class EnergyReport:
    """Mechanical energy recomputed from the current state."""

    kinetic: float
    potential: float

    @property
    def total(self) -> float:
        return self.kinetic + self.potential


class Simulation(ABC):
    """
    Base class for every interactive scenario.

    Subclasses declare their parameters, build state in initialize_state(),
    integrate it in step(dt) and paint it in draw(ax).
    """

    scenario_id: ClassVar[str] = ""
    title: ClassVar[str] = ""
    description: ClassVar[str] = ""
    time_step: ClassVar[float] = TIME_STEP

    def __init__(self, canvas: CanvasConfig | None = None):
        self.canvas = canvas or CanvasConfig()
        self.parameters = ParameterSet(self.define_parameters())
        self.time = 0.0
        self.is_running = False
        self._display: list[DisplayDatum] = []
        self.reset()

    @classmethod
    @abstractmethod
    def define_parameters(cls) -> list[ParameterSpec]:
        """
        Declare the adjustable parameters of this scenario.

        Returns:
            Specs in the order the sliders should appear
        """
        ...

    @abstractmethod
    def initialize_state(self) -> None:
        """Build the physical state from scratch using current parameters and canvas."""
        ...

    @abstractmethod
    def step(self, dt: float) -> None:
        """
        Advance the physical state by exactly one timestep.

        Integration is semi-implicit Euler (velocity first, then position);
        boundaries are applied after integration.

        Args:
            dt: Fixed timestep in seconds
        """
        ...

    @abstractmethod
    def draw(self, ax: "Axes") -> None:
        """
        Paint the current state.

        Must not mutate simulation state.

        Args:
            ax: Axes to draw on (cleared by the implementation)
        """
        ...

    # ---- lifecycle ---------------------------------------------------------

    def reset(self) -> None:
        """Restore default parameters and rebuild the state at time 0."""
        self.parameters.restore_defaults()
        self.rebuild()

    def rebuild(self) -> None:
        """Rebuild the state at time 0 from the current parameter values."""
        self.time = 0.0
        self.is_running = False
        self.initialize_state()
        self.refresh_display()

    def start(self) -> None:
        self.is_running = True

    def stop(self) -> None:
        self.is_running = False

    def toggle(self) -> bool:
        """Flip between running and stopped; returns the new running flag."""
        if self.is_running:
            self.stop()
        else:
            self.start()
        return self.is_running

    def set_parameter(self, param_id: str, value: float) -> None:
        """
        Write a parameter and let the scenario react.

        Unknown ids are ignored.
        """
        if param_id not in self.parameters:
            logger.debug("%s: ignoring unknown parameter %r", type(self).__name__, param_id)
            return
        stored = self.parameters.set(param_id, value)
        self.on_parameter_changed(param_id, stored)
        self.refresh_display()

    def on_parameter_changed(self, param_id: str, value: float) -> None:
        """Hook for scenario-specific reactions to a parameter write."""

    def update(self) -> None:
        """Advance one fixed timestep if running."""
        if not self.is_running:
            return
        self.time += self.time_step
        self.step(self.time_step)
        self.refresh_display()

    # ---- pointer hooks -----------------------------------------------------

    def on_press(self, x: float, y: float) -> None:
        """Pointer pressed at canvas coordinates (x, y)."""

    def on_drag(self, x: float, y: float) -> None:
        """Pointer moved with the button held."""

    def on_release(self, x: float, y: float) -> None:
        """Pointer released."""

    # ---- display data ------------------------------------------------------

    def energies(self) -> EnergyReport | None:
        """Kinetic and potential energy, for scenarios that track mechanics."""
        return None

    def compute_display(self) -> list[DisplayDatum]:
        """Rows for the readout; subclasses extend the base time row."""
        return [DisplayDatum("time", "経過時間", f"{self.time:.2f}", "秒")]

    def refresh_display(self) -> None:
        self._display = self.compute_display()

    def data_to_display(self) -> list[DisplayDatum]:
        """Current readout rows (a fresh list each call)."""
        return list(self._display)

    def display_value(self, key: str) -> str:
        """Formatted value of one readout row."""
        for datum in self._display:
            if datum.key == key:
                return datum.value
        raise KeyError(key)
