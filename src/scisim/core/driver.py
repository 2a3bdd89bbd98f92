"""
SimulationDriver: the per-frame host loop for one active scenario.

The driver holds exactly one ActiveSimulation. Selecting another scenario
drops the old instance (and its pending effects) and constructs a new one;
nothing else keeps a reference to the simulation.

Each tick() runs, in order and synchronously:
1. simulation.update()  (no-op while stopped)
2. simulation.draw(ax)
3. animator.advance(dt)  (tweens, delayed effects)
4. readout listeners with the fresh display rows

Any exception escaping a frame puts the driver in a failed state: the error
is logged, a static error panel replaces the canvas, failure listeners are
told (so the host can cancel its timer) and tick() returns False until a
scenario is selected again.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from scisim.core.animation import Animator
from scisim.core.simulation import CanvasConfig, DisplayDatum, Simulation
from scisim.errors import SimulationFailure

if TYPE_CHECKING:
    from matplotlib.axes import Axes

    from scisim.core.parameters import ParameterSpec
    from scisim.core.registry import Scenario, ScenarioCatalog

logger = logging.getLogger(__name__)

START_LABEL = "開始"
PAUSE_LABEL = "一時停止"

ReadoutListener = Callable[[list[DisplayDatum]], None]
FailureListener = Callable[[SimulationFailure], None]


@dataclass
class ActiveSimulation:
    """The scenario currently owned by the driver."""

    scenario: "Scenario"
    simulation: Simulation
    frames: int = 0


def paint_error_panel(ax: "Axes", message: str) -> None:
    """Replace the contents of ax with a static error message."""
    ax.clear()
    ax.set_axis_off()
    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1)
    ax.text(
        0.5,
        0.5,
        f"シミュレーションを続行できません\n\n{message}",
        ha="center",
        va="center",
        wrap=True,
        color="#b00020",
        bbox={"boxstyle": "round", "facecolor": "#fde7e9", "edgecolor": "#b00020"},
        transform=ax.transAxes,
    )


class SimulationDriver:
    """
    Owns the active simulation and runs one frame per tick().

    Args:
        catalog: Scenarios that can be selected
        canvas: Canvas size handed to every new simulation
        ax: Axes the simulation paints on (None for headless use)
    """

    def __init__(
        self,
        catalog: "ScenarioCatalog",
        canvas: CanvasConfig | None = None,
        ax: "Axes | None" = None,
    ):
        self.catalog = catalog
        self.canvas = canvas or CanvasConfig()
        self.ax = ax
        self.animator = Animator()
        self.active: ActiveSimulation | None = None
        self.failure: SimulationFailure | None = None
        self._readout_listeners: list[ReadoutListener] = []
        self._failure_listeners: list[FailureListener] = []

    # ---- listeners ---------------------------------------------------------

    def add_readout_listener(self, listener: ReadoutListener) -> None:
        self._readout_listeners.append(listener)

    def add_failure_listener(self, listener: FailureListener) -> None:
        self._failure_listeners.append(listener)

    # ---- scenario switching ------------------------------------------------

    @property
    def simulation(self) -> Simulation | None:
        return self.active.simulation if self.active else None

    @property
    def failed(self) -> bool:
        return self.failure is not None

    def select(self, scenario_id: str) -> Simulation | None:
        """
        Tear down the current scenario and construct a new one.

        Raises:
            ScenarioNotFoundError: If scenario_id is not in the catalog

        Returns:
            The new simulation, or None if its construction failed
        """
        scenario = self.catalog.get(scenario_id)

        self.animator.cancel_all()
        self.active = None
        self.failure = None

        try:
            simulation = scenario.create(self.canvas)
        except Exception as exc:
            self._fail(scenario.id, exc)
            return None

        self.active = ActiveSimulation(scenario=scenario, simulation=simulation)
        logger.info("Selected scenario %s (%s)", scenario.id, scenario.title)
        self._publish(simulation.data_to_display())
        return simulation

    # ---- frame loop --------------------------------------------------------

    def tick(self) -> bool:
        """
        Run one frame.

        Returns:
            True if the frame completed, False if there is nothing to run
            or the driver is (or just became) failed
        """
        if self.active is None or self.failure is not None:
            return False

        simulation = self.active.simulation
        try:
            simulation.update()
            if self.ax is not None:
                simulation.draw(self.ax)
            self.animator.advance(simulation.time_step)
            self._publish(simulation.data_to_display())
        except Exception as exc:
            self._fail(self.active.scenario.id, exc)
            return False

        self.active.frames += 1
        return True

    def run(self, n_frames: int) -> int:
        """
        Tick up to n_frames times (headless rendering, tests).

        Returns:
            Number of frames that completed
        """
        completed = 0
        for _ in range(n_frames):
            if not self.tick():
                break
            completed += 1
        return completed

    # ---- controls ----------------------------------------------------------

    @property
    def start_label(self) -> str:
        """Label for the start button given the running state."""
        simulation = self.simulation
        if simulation is not None and simulation.is_running:
            return PAUSE_LABEL
        return START_LABEL

    @property
    def parameter_specs(self) -> list["ParameterSpec"]:
        simulation = self.simulation
        return simulation.parameters.specs if simulation is not None else []

    def toggle_running(self) -> str:
        """Start or pause; returns the new start button label."""
        simulation = self.simulation
        if simulation is not None and not self.failed:
            simulation.toggle()
        return self.start_label

    def reset(self) -> None:
        simulation = self.simulation
        if simulation is None or self.failed:
            return
        self._guarded(simulation.reset)
        if not self.failed:
            self._publish(simulation.data_to_display())

    def set_parameter(self, param_id: str, value: float) -> None:
        simulation = self.simulation
        if simulation is None or self.failed:
            return
        self._guarded(simulation.set_parameter, param_id, value)

    def press(self, x: float, y: float) -> None:
        if self.simulation is not None and not self.failed:
            self._guarded(self.simulation.on_press, x, y)

    def drag(self, x: float, y: float) -> None:
        if self.simulation is not None and not self.failed:
            self._guarded(self.simulation.on_drag, x, y)

    def release(self, x: float, y: float) -> None:
        if self.simulation is not None and not self.failed:
            self._guarded(self.simulation.on_release, x, y)

    # ---- internals ---------------------------------------------------------

    def _guarded(self, func, *args) -> None:
        try:
            func(*args)
        except Exception as exc:
            scenario_id = self.active.scenario.id if self.active else "?"
            self._fail(scenario_id, exc)

    def _publish(self, rows: list[DisplayDatum]) -> None:
        for listener in self._readout_listeners:
            listener(rows)

    def _fail(self, scenario_id: str, exc: Exception) -> None:
        failure = SimulationFailure(scenario_id, exc)
        self.failure = failure
        self.animator.cancel_all()
        logger.error("Simulation %s failed", scenario_id, exc_info=exc)

        if self.ax is not None:
            paint_error_panel(self.ax, str(failure))

        for listener in self._failure_listeners:
            listener(failure)
