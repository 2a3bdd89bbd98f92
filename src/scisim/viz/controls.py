"""
Parameter sliders and the data readout.

ParameterPanel turns a list of ParameterSpec into matplotlib Sliders laid
out top to bottom inside a figure region. It is rebuilt from scratch every
time the scenario changes. DataReadout shows the display rows of the active
simulation as one text block, replaced wholesale every frame.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Callable, Mapping, Sequence

from matplotlib.widgets import Slider

if TYPE_CHECKING:
    from matplotlib.axes import Axes
    from matplotlib.figure import Figure

    from scisim.core.parameters import ParameterSpec
    from scisim.core.simulation import DisplayDatum

logger = logging.getLogger(__name__)

ROW_HEIGHT = 0.03
ROW_GAP = 0.015
LABEL_WIDTH = 0.35  # Fraction of the region kept for slider labels


class ParameterPanel:
    """
    One Slider per parameter spec.

    Args:
        fig: Figure that owns the slider axes
        rect: (left, bottom, width, height) of the panel region in figure coords
        on_change: Called with (param_id, value) when the user moves a slider
    """

    def __init__(
        self,
        fig: "Figure",
        rect: tuple[float, float, float, float],
        on_change: Callable[[str, float], None],
    ):
        self.fig = fig
        self.rect = rect
        self.on_change = on_change
        self.specs: list["ParameterSpec"] = []
        self.sliders: dict[str, Slider] = {}

    def build(self, specs: Sequence["ParameterSpec"], values: Mapping[str, float] | None = None) -> None:
        """Replace every slider with one per spec, initialised from values or defaults."""
        self.clear()
        left, bottom, width, height = self.rect
        top = bottom + height
        slider_left = left + width * LABEL_WIDTH
        slider_width = width * (1 - LABEL_WIDTH) * 0.7

        for i, spec in enumerate(specs):
            y = top - (i + 1) * (ROW_HEIGHT + ROW_GAP)
            if y < bottom:
                logger.warning("Parameter panel too short; %s not shown", spec.id)
                break
            ax = self.fig.add_axes([slider_left, y, slider_width, ROW_HEIGHT])
            initial = values.get(spec.id, spec.default) if values else spec.default
            slider = Slider(
                ax,
                spec.display_name,
                spec.min,
                spec.max,
                valinit=initial,
                valstep=spec.step,
            )
            slider.valtext.set_text(spec.format(initial))
            slider.on_changed(self._make_callback(spec))
            self.specs.append(spec)
            self.sliders[spec.id] = slider

    def _make_callback(self, spec: "ParameterSpec") -> Callable[[float], None]:
        def callback(value: float) -> None:
            self.sliders[spec.id].valtext.set_text(spec.format(value))
            self.on_change(spec.id, float(value))

        return callback

    def clear(self) -> None:
        """Remove every slider axes from the figure."""
        for slider in self.sliders.values():
            slider.ax.remove()
        self.sliders.clear()
        self.specs = []

    def restore_defaults(self) -> None:
        """Move sliders back to their defaults without notifying on_change."""
        for spec in self.specs:
            slider = self.sliders[spec.id]
            slider.eventson = False
            try:
                slider.set_val(spec.default)
            finally:
                slider.eventson = True
            slider.valtext.set_text(spec.format(spec.default))

    def values(self) -> dict[str, float]:
        return {pid: float(slider.val) for pid, slider in self.sliders.items()}


def format_rows(rows: Sequence["DisplayDatum"]) -> str:
    """One 'name: value unit' line per row."""
    lines = []
    for row in rows:
        line = f"{row.name}: {row.value}"
        if row.unit:
            line += f" {row.unit}"
        lines.append(line)
    return "\n".join(lines)


class DataReadout:
    """Text block listing the active simulation's display rows."""

    def __init__(self, ax: "Axes"):
        self.ax = ax
        ax.set_axis_off()
        self.text = ax.text(
            0.02,
            0.98,
            "",
            va="top",
            ha="left",
            family="monospace",
            fontsize=9,
            transform=ax.transAxes,
        )

    def update(self, rows: Sequence["DisplayDatum"]) -> None:
        self.text.set_text(format_rows(rows))

    @property
    def content(self) -> str:
        return self.text.get_text()
