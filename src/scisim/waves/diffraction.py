"""
Diffraction past a barrier, by Huygens' principle.

A point source at (100, h/2) sends circular waves toward a barrier at x = w/2.
Left of the barrier the field is the direct wave. Every open cell of the
barrier column whose direct field is positive re-emits as a secondary
source, and the far side is the sum of those secondary waves divided by
√N, N being the number of open cells in the column.

Barrier shapes:
    0  single slit: one opening of slit_width centred on h/2
    1  obstacle: a block of slit_width centred on h/2, open elsewhere
    2  double slit: two openings of slit_width, slit_distance apart
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

import numpy as np
from matplotlib.patches import Rectangle

from scisim.core.field import PointSource, WaveGrid
from scisim.core.parameters import ParameterSpec
from scisim.core.simulation import DisplayDatum
from scisim.viz import drawing
from scisim.waves.base import WaveSimulation

if TYPE_CHECKING:
    from matplotlib.axes import Axes

logger = logging.getLogger(__name__)

CELL_SIZE = 3
SOURCE_X = 100.0
ATTENUATION_K = 0.001
BARRIER_THICKNESS = 6.0

SINGLE_SLIT = 0
OBSTACLE = 1
DOUBLE_SLIT = 2
OBSTACLE_NAMES = {SINGLE_SLIT: "単一スリット", OBSTACLE: "障害物", DOUBLE_SLIT: "二重スリット"}

BARRIER_PARAMETERS = ("obstacle_type", "slit_width", "slit_distance")


class WaveDiffractionSimulation(WaveSimulation):
    """Single slit, obstacle or double slit in front of one point source."""

    scenario_id = "wave_diffraction"
    title = "波の回折"
    description = "スリットや障害物の後ろに回り込む波を観察します。"

    @classmethod
    def define_parameters(cls) -> list[ParameterSpec]:
        return [
            ParameterSpec("obstacle_type", "障害物の種類", 0, 2, 1, 0, ""),
            ParameterSpec("amplitude", "振幅", 0.1, 1, 0.1, 1, ""),
            ParameterSpec("frequency", "周波数", 0.1, 2, 0.1, 0.5, "Hz"),
            ParameterSpec("wavelength", "波長", 10, 100, 5, 30, "px"),
            ParameterSpec("slit_width", "スリット幅", 10, 200, 10, 50, "px"),
            ParameterSpec("slit_distance", "スリット間隔", 20, 200, 10, 100, "px"),
        ]

    def initialize_waves(self) -> None:
        self.grid = WaveGrid(self.canvas.width, self.canvas.height, CELL_SIZE)
        self.barrier_x = self.canvas.width / 2
        self.slit_col = min(int(self.barrier_x // CELL_SIZE), self.grid.nx - 1)
        self.sources = [PointSource(x=SOURCE_X, y=self.canvas.height / 2)]
        self._sync_source()
        self.setup_obstacles()

    def _sync_source(self) -> None:
        for source in self.sources:
            source.amplitude = self.parameters["amplitude"]
            source.frequency = self.parameters["frequency"]
            source.wavelength = self.parameters["wavelength"]

    @property
    def obstacle_type(self) -> int:
        return int(self.parameters["obstacle_type"])

    def setup_obstacles(self) -> None:
        """Recompute the openings and the aperture cells of the barrier column."""
        self.openings = self.opening_intervals()
        row_centres = self.grid.ys[:, 0]
        open_rows = np.zeros(self.grid.ny, dtype=bool)
        for top, bottom in self.openings:
            open_rows |= (row_centres >= top) & (row_centres <= bottom)
        self.aperture_rows = np.flatnonzero(open_rows)
        logger.debug(
            "Barrier %s: %d open cells", OBSTACLE_NAMES[self.obstacle_type], len(self.aperture_rows)
        )

    def opening_intervals(self) -> list[tuple[float, float]]:
        """Open (top, bottom) spans of the barrier in canvas pixels."""
        height = float(self.canvas.height)
        centre = height / 2
        half = self.parameters["slit_width"] / 2
        if self.obstacle_type == SINGLE_SLIT:
            spans = [(centre - half, centre + half)]
        elif self.obstacle_type == OBSTACLE:
            spans = [(0.0, centre - half), (centre + half, height)]
        else:
            offset = self.parameters["slit_distance"] / 2
            spans = [
                (centre - offset - half, centre - offset + half),
                (centre + offset - half, centre + offset + half),
            ]
        return [(max(top, 0.0), min(bottom, height)) for top, bottom in spans if bottom > top]

    def wall_intervals(self) -> list[tuple[float, float]]:
        """Closed (top, bottom) spans of the barrier, the complement of the openings."""
        walls = []
        cursor = 0.0
        for top, bottom in sorted(self.openings):
            if top > cursor:
                walls.append((cursor, top))
            cursor = max(cursor, bottom)
        if cursor < self.canvas.height:
            walls.append((cursor, float(self.canvas.height)))
        return walls

    def on_drag(self, x: float, y: float) -> None:
        # The source stays on the incident side of the barrier
        super().on_drag(min(x, self.barrier_x - BARRIER_THICKNESS), y)

    def on_parameter_changed(self, param_id: str, value: float) -> None:
        if param_id in BARRIER_PARAMETERS:
            self.setup_obstacles()
        else:
            self._sync_source()
        self.recompute()

    def recompute(self) -> None:
        grid = self.grid
        source = self.sources[0]
        values = np.zeros(grid.shape)

        near = slice(0, self.slit_col + 1)
        values[:, near] = source.contribution(grid.xs[:, near], grid.ys[:, near], self.time, ATTENUATION_K)

        far = slice(self.slit_col + 1, grid.nx)
        far_xs, far_ys = grid.xs[:, far], grid.ys[:, far]
        count = len(self.aperture_rows)
        if count and far_xs.size:
            aperture_x = grid.xs[0, self.slit_col]
            total = np.zeros(far_xs.shape)
            for row in self.aperture_rows:
                if values[row, self.slit_col] <= 0:
                    continue
                secondary = PointSource(
                    x=aperture_x,
                    y=grid.ys[row, 0],
                    amplitude=source.amplitude,
                    frequency=source.frequency,
                    wavelength=source.wavelength,
                )
                total += secondary.contribution(far_xs, far_ys, self.time, ATTENUATION_K)
            values[:, far] = total / np.sqrt(count)

        grid.values = np.clip(values, -1.0, 1.0)

    def diffraction_angle(self) -> float:
        """atan(λ/w) in degrees, w being slit_width."""
        return float(np.degrees(np.arctan(self.parameters["wavelength"] / self.parameters["slit_width"])))

    def rayleigh_angle(self) -> float:
        """1.22·λ/w converted to degrees."""
        return float(np.degrees(1.22 * self.parameters["wavelength"] / self.parameters["slit_width"]))

    def compute_display(self) -> list[DisplayDatum]:
        wavelength = self.parameters["wavelength"]
        slit_width = self.parameters["slit_width"]
        rows = super().compute_display()
        rows += [
            DisplayDatum("obstacle_type", "障害物の種類", OBSTACLE_NAMES[self.obstacle_type], ""),
            DisplayDatum("wavelength", "波長", f"{wavelength:.0f}", "px"),
            DisplayDatum("frequency", "周波数", f"{self.parameters['frequency']:.1f}", "Hz"),
            DisplayDatum("slit_width", "スリット幅", f"{slit_width:.0f}", "px"),
            DisplayDatum("ratio", "λ/スリット幅", f"{wavelength / slit_width:.2f}", ""),
            DisplayDatum("diffraction_angle", "主回折角", f"{self.diffraction_angle():.1f}", "°"),
            DisplayDatum("rayleigh_angle", "分解能（レイリー基準）", f"{self.rayleigh_angle():.1f}", "°"),
        ]
        if self.obstacle_type == DOUBLE_SLIT:
            slit_distance = self.parameters["slit_distance"]
            fringe = np.degrees(np.arctan(wavelength / slit_distance))
            rows += [
                DisplayDatum("slit_distance", "スリット間隔", f"{slit_distance:.0f}", "px"),
                DisplayDatum("interference_angle", "干渉縞の角度", f"{fringe:.1f}", "°"),
            ]
        return rows

    def draw(self, ax: "Axes") -> None:
        drawing.prepare_canvas(ax, self.canvas)
        self.draw_field(ax, self.grid)
        for top, bottom in self.wall_intervals():
            ax.add_patch(
                Rectangle(
                    (self.barrier_x - BARRIER_THICKNESS / 2, top),
                    BARRIER_THICKNESS,
                    bottom - top,
                    facecolor="#333333",
                    zorder=3,
                )
            )
        self.draw_sources(ax)
        drawing.draw_label(ax, 10, 20, f"障害物: {OBSTACLE_NAMES[self.obstacle_type]}")
