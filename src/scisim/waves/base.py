"""
Base class for wave scenarios built from point sources.

Sources can be grabbed with the pointer (within 20 px) and dragged around
the canvas; the field is recomputed from the new positions on the next frame.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from scisim.core.field import PointSource, WaveGrid
from scisim.core.simulation import Simulation
from scisim.viz import drawing
from scisim.viz.fields import WAVE_CMAP

if TYPE_CHECKING:
    from matplotlib.axes import Axes

PICK_RADIUS = 20.0


class WaveSimulation(Simulation):
    """Simulation whose state is a set of point sources and sampled fields."""

    def initialize_state(self) -> None:
        self.sources: list[PointSource] = []
        self.selected_source: int | None = None
        self.initialize_waves()
        self.recompute()

    def initialize_waves(self) -> None:
        """Create sources and grids; called on every rebuild."""

    def recompute(self) -> None:
        """Recompute every field from scratch at the current time."""

    def step(self, dt: float) -> None:
        self.recompute()

    # ---- source dragging ---------------------------------------------------

    def source_at(self, x: float, y: float) -> int | None:
        """Index of the nearest source within the pick radius."""
        best, best_distance = None, PICK_RADIUS
        for i, source in enumerate(self.sources):
            distance = float(np.hypot(source.x - x, source.y - y))
            if distance <= best_distance:
                best, best_distance = i, distance
        return best

    def on_press(self, x: float, y: float) -> None:
        self.selected_source = self.source_at(x, y)

    def on_drag(self, x: float, y: float) -> None:
        if self.selected_source is None:
            return
        source = self.sources[self.selected_source]
        source.x = min(max(x, 0.0), float(self.canvas.width))
        source.y = min(max(y, 0.0), float(self.canvas.height))
        self.recompute()
        self.refresh_display()

    def on_release(self, x: float, y: float) -> None:
        self.selected_source = None

    # ---- drawing -----------------------------------------------------------

    def draw_field(self, ax: "Axes", grid: WaveGrid) -> None:
        ax.imshow(
            grid.values,
            cmap=WAVE_CMAP,
            vmin=-1,
            vmax=1,
            extent=grid.extent,
            interpolation="nearest",
            zorder=0,
        )

    def draw_sources(self, ax: "Axes") -> None:
        for i, source in enumerate(self.sources):
            color = "#FFD700" if i == self.selected_source else "#333333"
            drawing.draw_ball(ax, (source.x, source.y), 6, color=color)
            drawing.draw_label(ax, source.x + 8, source.y - 8, f"S{i + 1}")
