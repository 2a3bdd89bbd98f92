"""
Reflection of a travelling wave at a fixed or free end, and the standing
wave that forms.

With boundary position B, wavenumber k and reflection coefficient r
(-1 fixed end, +1 free end):
    incident(x)  = A·sin(k(x - λft))
    reflected(x) = r·A·sin(k(2B - x - λft))
    total        = incident + reflected
and the total has the closed standing-wave form
    fixed: 2A·sin(k(x - B))·cos(kB - ωt)     node at B
    free:  2A·cos(k(x - B))·sin(kB - ωt)     antinode at B
Nodes and antinodes repeat every λ/2 back from the boundary. Samples past
the boundary are zero.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from scisim.core.parameters import ParameterSpec
from scisim.core.simulation import DisplayDatum
from scisim.viz import drawing
from scisim.waves.base import WaveSimulation

if TYPE_CHECKING:
    from matplotlib.axes import Axes

SAMPLES = 1000
BOUNDARY_MARGIN = 50.0
HARMONICS = 3

FIXED_END = 0
FREE_END = 1
BOUNDARY_NAMES = {FIXED_END: "固定端", FREE_END: "自由端"}


class WaveReflectionSimulation(WaveSimulation):
    """1D reflection at the right-hand boundary."""

    scenario_id = "wave_reflection"
    title = "波の反射と定在波"
    description = "固定端・自由端での反射と定在波の形成を観察します。"

    @classmethod
    def define_parameters(cls) -> list[ParameterSpec]:
        return [
            ParameterSpec("amplitude", "振幅", 0.1, 1, 0.1, 1, ""),
            ParameterSpec("frequency", "周波数", 0.1, 3, 0.1, 1, "Hz"),
            ParameterSpec("wavelength", "波長", 20, 200, 10, 100, "px"),
            ParameterSpec("boundary_type", "境界条件", 0, 1, 1, 0, ""),
            ParameterSpec("show_components", "成分表示", 0, 1, 1, 1, ""),
        ]

    def initialize_waves(self) -> None:
        self.boundary = self.canvas.width - BOUNDARY_MARGIN
        self.xs = np.arange(SAMPLES) / SAMPLES * self.canvas.width
        self.boundary_index = int(np.floor(self.boundary / self.canvas.width * SAMPLES))
        zeros = np.zeros(SAMPLES)
        self.incident = zeros.copy()
        self.reflected = zeros.copy()
        self.total = zeros.copy()
        self.standing = zeros.copy()

    @property
    def boundary_type(self) -> int:
        return int(self.parameters["boundary_type"])

    @property
    def reflection_coefficient(self) -> float:
        return -1.0 if self.boundary_type == FIXED_END else 1.0

    def on_parameter_changed(self, param_id: str, value: float) -> None:
        self.recompute()

    def recompute(self) -> None:
        amplitude = self.parameters["amplitude"]
        frequency = self.parameters["frequency"]
        wavelength = self.parameters["wavelength"]
        k = 2 * np.pi / wavelength
        omega = 2 * np.pi * frequency
        travel = self.time * frequency * wavelength
        x, b = self.xs, self.boundary

        self.incident = amplitude * np.sin(k * (x - travel))
        self.reflected = self.reflection_coefficient * amplitude * np.sin(k * (2 * b - x - travel))
        self.total = self.incident + self.reflected
        if self.boundary_type == FIXED_END:
            self.standing = 2 * amplitude * np.sin(k * (x - b)) * np.cos(k * b - omega * self.time)
        else:
            self.standing = 2 * amplitude * np.cos(k * (x - b)) * np.sin(k * b - omega * self.time)

        beyond = np.arange(SAMPLES) > self.boundary_index
        for wave in (self.incident, self.reflected, self.total, self.standing):
            wave[beyond] = 0.0

    def node_positions(self) -> tuple[list[float], list[float]]:
        """
        Positions of the standing-wave nodes and antinodes.

        Returns:
            (nodes, antinodes), each ordered from the boundary leftwards
        """
        half = self.parameters["wavelength"] / 2
        anchors = [self.boundary]
        i = 1
        while i * half < self.boundary:
            anchors.append(self.boundary - i * half)
            i += 1
        midpoints = [(a + b) / 2 for a, b in zip(anchors, anchors[1:])]
        if self.boundary_type == FIXED_END:
            return anchors, midpoints
        return midpoints, anchors

    def fundamental_frequency(self) -> float:
        """λf / (2L) for a string of length L = boundary position."""
        wave_speed = self.parameters["wavelength"] * self.parameters["frequency"]
        return wave_speed / (2 * self.boundary)

    def compute_display(self) -> list[DisplayDatum]:
        wavelength = self.parameters["wavelength"]
        frequency = self.parameters["frequency"]
        fundamental = self.fundamental_frequency()
        rows = super().compute_display()
        rows += [
            DisplayDatum("boundary_type", "境界条件", BOUNDARY_NAMES[self.boundary_type], ""),
            DisplayDatum("reflection_coefficient", "反射係数", f"{self.reflection_coefficient:+.0f}", ""),
            DisplayDatum("wavelength", "波長", f"{wavelength:.0f}", "px"),
            DisplayDatum("wave_speed", "波の速さ", f"{wavelength * frequency:.1f}", "px/s"),
            DisplayDatum("fundamental", "基本振動数", f"{fundamental:.3f}", "Hz"),
        ]
        for n in range(2, HARMONICS + 1):
            rows.append(DisplayDatum(f"harmonic_{n}", f"第{n}倍振動", f"{fundamental * n:.3f}", "Hz"))
        return rows

    def draw(self, ax: "Axes") -> None:
        drawing.prepare_canvas(ax, self.canvas)
        middle = self.canvas.height / 2
        scale = (self.canvas.height / 2 - 40) / 2.2

        ax.axhline(middle, color="#DDDDDD", linewidth=1)
        ax.axvline(self.boundary, color="#333333", linewidth=3)
        drawing.draw_label(ax, self.boundary - 20, 24, BOUNDARY_NAMES[self.boundary_type])

        if self.parameters["show_components"] >= 1:
            ax.plot(self.xs, middle - self.incident * scale, color="#3498db", linewidth=1, alpha=0.7, label="入射波")
            ax.plot(self.xs, middle - self.reflected * scale, color="#e74c3c", linewidth=1, alpha=0.7, label="反射波")
        ax.plot(self.xs, middle - self.total * scale, color="#2c3e50", linewidth=2, label="合成波")

        nodes, antinodes = self.node_positions()
        ax.scatter(nodes, [middle] * len(nodes), marker="o", color="#8e44ad", s=20, zorder=5)
        ax.scatter(antinodes, [middle] * len(antinodes), marker="^", color="#27ae60", s=20, zorder=5)
        ax.legend(loc="lower left", fontsize=8)
