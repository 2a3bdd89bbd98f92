"""
Interference of several coherent point sources.

Sources are spaced evenly on a circle of radius 150 px around the canvas
centre and share amplitude, frequency and wavelength. The field is the
clipped superposition of their damped travelling waves, recomputed from
scratch every frame.
"""

from __future__ import annotations
from itertools import combinations
from typing import TYPE_CHECKING

import numpy as np

from scisim.core.field import PointSource, WaveGrid
from scisim.core.parameters import ParameterSpec
from scisim.core.simulation import DisplayDatum
from scisim.viz import drawing
from scisim.waves.base import WaveSimulation

if TYPE_CHECKING:
    from matplotlib.axes import Axes

CELL_SIZE = 4
SOURCE_RING_RADIUS = 150.0
SOURCE_COLORS = ["#e74c3c", "#3498db", "#2ecc71", "#f39c12", "#9b59b6"]


class WaveInterferenceSimulation(WaveSimulation):
    """Up to five in-phase sources on a ring."""

    scenario_id = "wave_interference"
    title = "波の干渉"
    description = "複数の波源から出た波の重ね合わせを観察します。"

    @classmethod
    def define_parameters(cls) -> list[ParameterSpec]:
        return [
            ParameterSpec("source_count", "波源の数", 1, 5, 1, 2, "個"),
            ParameterSpec("amplitude", "振幅", 0.1, 1, 0.1, 1, ""),
            ParameterSpec("frequency", "周波数", 0.1, 3, 0.1, 1, "Hz"),
            ParameterSpec("wavelength", "波長", 20, 200, 10, 80, "px"),
            ParameterSpec("speed", "波の速さ", 10, 100, 5, 50, "px/s"),
            ParameterSpec("damping", "減衰係数", 0, 0.02, 0.001, 0.005, ""),
        ]

    def initialize_waves(self) -> None:
        self.grid = WaveGrid(self.canvas.width, self.canvas.height, CELL_SIZE)
        self.place_sources()

    def place_sources(self) -> None:
        """Spread source_count sources evenly around the ring."""
        count = int(self.parameters["source_count"])
        cx, cy = self.canvas.center
        self.sources = []
        for i in range(count):
            angle = 2 * np.pi * i / count
            self.sources.append(
                PointSource(
                    x=cx + SOURCE_RING_RADIUS * np.cos(angle),
                    y=cy + SOURCE_RING_RADIUS * np.sin(angle),
                    amplitude=self.parameters["amplitude"],
                    frequency=self.parameters["frequency"],
                    wavelength=self.parameters["wavelength"],
                )
            )
        self.selected_source = None

    def on_parameter_changed(self, param_id: str, value: float) -> None:
        if param_id == "source_count":
            self.place_sources()
        else:
            for source in self.sources:
                if param_id == "amplitude":
                    source.amplitude = value
                elif param_id == "frequency":
                    source.frequency = value
                elif param_id == "wavelength":
                    source.wavelength = value
        self.recompute()

    def recompute(self) -> None:
        self.grid.recompute(self.sources, self.time, self.parameters["damping"])

    def source_distances(self) -> list[tuple[int, int, float]]:
        """(i, j, distance) for every pair of sources, 1-based indices."""
        return [
            (i + 1, j + 1, float(np.hypot(a.x - b.x, a.y - b.y)))
            for (i, a), (j, b) in combinations(enumerate(self.sources), 2)
        ]

    def compute_display(self) -> list[DisplayDatum]:
        wavelength = self.parameters["wavelength"]
        frequency = self.parameters["frequency"]
        rows = super().compute_display()
        rows += [
            DisplayDatum("source_count", "波源の数", f"{len(self.sources)}", "個"),
            DisplayDatum("wavelength", "波長", f"{wavelength:.0f}", "px"),
            DisplayDatum("frequency", "周波数", f"{frequency:.1f}", "Hz"),
            DisplayDatum("wave_speed", "波の速さ", f"{self.parameters['speed']:.1f}", "px/s"),
        ]
        distances = self.source_distances()
        for i, j, distance in distances:
            rows.append(DisplayDatum(f"distance_{i}_{j}", f"S{i}-S{j}間距離", f"{distance:.0f}", "px"))
        if distances:
            rows.append(DisplayDatum("distance_ratio", "距離/波長", f"{distances[0][2] / wavelength:.2f}", "λ"))
        return rows

    def draw(self, ax: "Axes") -> None:
        drawing.prepare_canvas(ax, self.canvas)
        self.draw_field(ax, self.grid)
        for i, source in enumerate(self.sources):
            color = "#FFD700" if i == self.selected_source else SOURCE_COLORS[i % len(SOURCE_COLORS)]
            drawing.draw_ball(ax, (source.x, source.y), 8, color=color)
            drawing.draw_label(ax, source.x + 10, source.y - 10, f"S{i + 1}")
