"""
The interactive matplotlib application.

Layout (figure coordinates):
- left column: scenario selector (RadioButtons) and the molecule panel
- centre: the simulation canvas with Start/Reset buttons below it
- right column: parameter sliders above the data readout

A FuncAnimation calls SimulationDriver.tick() at config.fps. Mouse events
on the canvas axes are forwarded to the active simulation's pointer hooks.
When the driver fails, the animation's event source is stopped; selecting
another scenario starts it again.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.widgets import Button, RadioButtons

from scisim.config import AppConfig
from scisim.core.animation import Animator, Easing
from scisim.core.driver import SimulationDriver
from scisim.core.simulation import CanvasConfig, TIME_STEP
from scisim.errors import RenderBackendError
from scisim.preferences import DEFAULT_THEME, style_for
from scisim.scenarios import default_catalog
from scisim.viz.controls import DataReadout, ParameterPanel
from scisim.viz.molecule_view import MoleculeView

if TYPE_CHECKING:
    from scisim.core.registry import ScenarioCatalog
    from scisim.errors import SimulationFailure

logger = logging.getLogger(__name__)

SELECTOR_RECT = (0.01, 0.45, 0.15, 0.5)
MOLECULE_RECT = (0.01, 0.05, 0.15, 0.33)
CANVAS_RECT = (0.18, 0.14, 0.5, 0.78)
START_RECT = (0.18, 0.04, 0.1, 0.06)
RESET_RECT = (0.30, 0.04, 0.1, 0.06)
PANEL_RECT = (0.72, 0.5, 0.27, 0.45)
READOUT_RECT = (0.72, 0.02, 0.27, 0.45)
MOLECULE_TEMPLATE = "H2O"


class SimulationApp:
    """
    Figure, widgets and frame loop around one SimulationDriver.

    Args:
        config: Application settings (canvas size, fps, default scenario)
        catalog: Scenarios to offer (the built-in catalog if None)
        theme: "light" or "dark"
        show_molecule: Whether to add the 3D molecule panel
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        catalog: "ScenarioCatalog | None" = None,
        theme: str = DEFAULT_THEME,
        show_molecule: bool = True,
    ):
        self.config = config or AppConfig()
        self.catalog = catalog or default_catalog()
        self.theme = theme
        self.animation: FuncAnimation | None = None
        self.molecule_view: MoleculeView | None = None
        self.effects = Animator()  # Effects that outlive a scenario switch
        self._dragging = False
        self._last_point = (0.0, 0.0)

        with plt.style.context(style_for(theme)):
            self._build(show_molecule)

        self.driver.add_readout_listener(self.readout.update)
        self.driver.add_failure_listener(self._on_failure)
        self.select(self.config.default_scenario)

    # ---- construction ------------------------------------------------------

    def _build(self, show_molecule: bool) -> None:
        self.fig = plt.figure(figsize=(15, 8))
        self.title_text = self.fig.text(0.43, 0.96, "", ha="center", fontsize=14, alpha=0.0)

        self.canvas_ax = self.fig.add_axes(CANVAS_RECT)
        canvas = CanvasConfig(self.config.canvas_width, self.config.canvas_height)
        self.driver = SimulationDriver(self.catalog, canvas, self.canvas_ax)

        selector_ax = self.fig.add_axes(SELECTOR_RECT)
        selector_ax.set_title("シミュレーション", fontsize=10)
        self.selector = RadioButtons(selector_ax, self.catalog.titles)
        self.selector.on_clicked(self._on_select_title)

        self.start_button = Button(self.fig.add_axes(START_RECT), self.driver.start_label)
        self.start_button.on_clicked(lambda _event: self.toggle_running())
        self.reset_button = Button(self.fig.add_axes(RESET_RECT), "リセット")
        self.reset_button.on_clicked(lambda _event: self.reset())

        self.panel = ParameterPanel(self.fig, PANEL_RECT, self.driver.set_parameter)
        self.readout = DataReadout(self.fig.add_axes(READOUT_RECT))

        if show_molecule:
            self._build_molecule_panel()

        self.fig.canvas.mpl_connect("button_press_event", self._on_press)
        self.fig.canvas.mpl_connect("motion_notify_event", self._on_motion)
        self.fig.canvas.mpl_connect("button_release_event", self._on_release)

    def _build_molecule_panel(self) -> None:
        try:
            self.molecule_view = MoleculeView.create(self.fig, MOLECULE_RECT, animator=self.effects)
            self.molecule_view.load_template(MOLECULE_TEMPLATE)
            self.molecule_view.ax.set_title(self.molecule_view.caption(), fontsize=9)
        except RenderBackendError as exc:
            # Only this panel is affected; the simulations keep running
            logger.warning("Molecule panel unavailable: %s", exc)
            fallback = self.fig.add_axes(MOLECULE_RECT)
            fallback.set_axis_off()
            fallback.text(0.5, 0.5, str(exc), ha="center", va="center", wrap=True, color="#b00020")

    # ---- actions -----------------------------------------------------------

    def select(self, scenario_id: str) -> None:
        simulation = self.driver.select(scenario_id)
        values = simulation.parameters.as_dict() if simulation is not None else None
        self.panel.build(self.driver.parameter_specs, values)
        self.start_button.label.set_text(self.driver.start_label)

        index = self.catalog.ids.index(scenario_id)
        if self.selector.value_selected != self.catalog.titles[index]:
            self.selector.eventson = False
            try:
                self.selector.set_active(index)
            finally:
                self.selector.eventson = True

        self.title_text.set_text(self.catalog.get(scenario_id).title)
        self.driver.animator.tween(0.0, 1.0, 0.5, self.title_text.set_alpha, easing=Easing.POWER2_IN_OUT)

        if self.animation is not None and simulation is not None:
            self.animation.event_source.start()
        self.fig.canvas.draw_idle()

    def toggle_running(self) -> None:
        self.start_button.label.set_text(self.driver.toggle_running())
        self.fig.canvas.draw_idle()

    def reset(self) -> None:
        self.driver.reset()
        self.panel.restore_defaults()
        self.start_button.label.set_text(self.driver.start_label)
        self.fig.canvas.draw_idle()

    def frame(self, _frame_number=None) -> bool:
        """One host frame: driver tick plus panel effects."""
        ok = self.driver.tick()
        self.effects.advance(TIME_STEP)
        if ok:
            # The simulation may stop itself (landing, reaching the end)
            self.start_button.label.set_text(self.driver.start_label)
        return ok

    def run(self) -> None:
        """Start the frame loop and show the window (blocks)."""
        self.animation = FuncAnimation(
            self.fig,
            self.frame,
            interval=self.config.frame_interval_ms,
            blit=False,
            cache_frame_data=False,
        )
        with plt.style.context(style_for(self.theme)):
            plt.show()

    # ---- event handlers ----------------------------------------------------

    def _on_select_title(self, title: str) -> None:
        index = self.catalog.titles.index(title)
        self.select(self.catalog.ids[index])

    def _on_failure(self, failure: "SimulationFailure") -> None:
        if self.animation is not None:
            self.animation.event_source.stop()
        self.start_button.label.set_text(self.driver.start_label)
        self.fig.canvas.draw_idle()

    def _canvas_point(self, event) -> tuple[float, float] | None:
        if event.inaxes is not self.canvas_ax or event.xdata is None:
            return None
        return float(event.xdata), float(event.ydata)

    def _on_press(self, event) -> None:
        point = self._canvas_point(event)
        if point is not None:
            self._dragging = True
            self._last_point = point
            self.driver.press(*point)

    def _on_motion(self, event) -> None:
        if not self._dragging:
            return
        point = self._canvas_point(event)
        if point is not None:
            self._last_point = point
            self.driver.drag(*point)

    def _on_release(self, event) -> None:
        if not self._dragging:
            return
        self._dragging = False
        point = self._canvas_point(event)
        self.driver.release(*(point or self._last_point))


def launch(config: AppConfig | None = None, theme: str = DEFAULT_THEME) -> SimulationApp:
    """Build the app and run it until the window closes."""
    app = SimulationApp(config=config, theme=theme)
    app.run()
    return app
