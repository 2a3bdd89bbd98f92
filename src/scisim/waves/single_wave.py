"""
A single travelling wave shown two ways:
- a 1D profile y(x) across the canvas (500 samples)
- a 2D field of circular waves from a source in the middle of the top half

The waveform can be sine, triangle, square or sawtooth; all four are
functions of the same phase 2π·x/λ - 2π·f·t + φ.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from scisim.core.field import PointSource, WaveGrid, attenuation
from scisim.core.parameters import ParameterSpec
from scisim.core.simulation import DisplayDatum
from scisim.viz import drawing
from scisim.waves.base import WaveSimulation

if TYPE_CHECKING:
    from matplotlib.axes import Axes

PROFILE_SAMPLES = 500
CELL_SIZE = 5
ATTENUATION_K = 0.01

WAVE_TYPE_NAMES = ["正弦波", "三角波", "矩形波", "鋸歯波"]


def waveform(phase: np.ndarray, wave_type: int) -> np.ndarray:
    """
    Unit-amplitude periodic waveform of the given phase.

    Args:
        phase: Phase in radians
        wave_type: 0 sine, 1 triangle, 2 square, 3 sawtooth
    """
    if wave_type == 0:
        return np.sin(phase)
    if wave_type == 1:
        return (2 / np.pi) * np.arcsin(np.sin(phase))
    if wave_type == 2:
        return np.sign(np.sin(phase))
    if wave_type == 3:
        return (2 / np.pi) * np.arctan(np.tan(phase / 2))
    msg = f"Unknown wave type {wave_type}"
    raise ValueError(msg)


class SingleWaveSimulation(WaveSimulation):
    """Travelling wave with selectable waveform."""

    scenario_id = "single_wave"
    title = "単一波の観察"
    description = "振幅・周波数・波長・位相と波形の関係を観察します。"

    @classmethod
    def define_parameters(cls) -> list[ParameterSpec]:
        return [
            ParameterSpec("amplitude", "振幅", 0.1, 1, 0.1, 1, ""),
            ParameterSpec("frequency", "周波数", 0.1, 5, 0.1, 1, "Hz"),
            ParameterSpec("wavelength", "波長", 20, 200, 10, 100, "px"),
            ParameterSpec("phase", "位相", 0, 360, 15, 0, "°"),
            ParameterSpec("wave_type", "波の種類", 0, 3, 1, 0, ""),
        ]

    def initialize_waves(self) -> None:
        self.profile_x = np.linspace(0, self.canvas.width, PROFILE_SAMPLES)
        self.profile = np.zeros(PROFILE_SAMPLES)
        self.grid = WaveGrid(self.canvas.width, self.canvas.height / 2, CELL_SIZE)
        self.sources = [PointSource(x=self.canvas.width / 2, y=self.canvas.height / 4)]
        self._sync_source()

    def _sync_source(self) -> None:
        for source in self.sources:
            source.amplitude = self.parameters["amplitude"]
            source.frequency = self.parameters["frequency"]
            source.wavelength = self.parameters["wavelength"]
            source.phase = np.radians(self.parameters["phase"])

    @property
    def wave_type(self) -> int:
        return int(self.parameters["wave_type"])

    def on_parameter_changed(self, param_id: str, value: float) -> None:
        self._sync_source()
        self.recompute()

    def recompute(self) -> None:
        amplitude = self.parameters["amplitude"]
        frequency = self.parameters["frequency"]
        wavelength = self.parameters["wavelength"]
        phase_shift = np.radians(self.parameters["phase"])

        phase = 2 * np.pi * self.profile_x / wavelength - 2 * np.pi * frequency * self.time + phase_shift
        self.profile = waveform(phase, self.wave_type) * amplitude

        source = self.sources[0]
        distance = source.distance_to(self.grid.xs, self.grid.ys)
        field_phase = source.phase_at(self.grid.xs, self.grid.ys, self.time)
        self.grid.values = waveform(field_phase, self.wave_type) * amplitude * attenuation(distance, ATTENUATION_K)

    def compute_display(self) -> list[DisplayDatum]:
        frequency = self.parameters["frequency"]
        wavelength = self.parameters["wavelength"]
        rows = super().compute_display()
        rows += [
            DisplayDatum("wave_type", "波の種類", WAVE_TYPE_NAMES[self.wave_type], ""),
            DisplayDatum("period", "周期", f"{1 / frequency:.2f}", "秒"),
            DisplayDatum("wavenumber", "波数", f"{2 * np.pi / wavelength:.4f}", "rad/px"),
            DisplayDatum("angular_frequency", "角周波数", f"{2 * np.pi * frequency:.2f}", "rad/s"),
            DisplayDatum("wave_speed", "波の速さ", f"{wavelength * frequency:.1f}", "px/s"),
            DisplayDatum("phase", "位相", f"{self.parameters['phase']:.0f}", "°"),
        ]
        return rows

    def draw(self, ax: "Axes") -> None:
        drawing.prepare_canvas(ax, self.canvas)
        self.draw_field(ax, self.grid)
        self.draw_sources(ax)

        # Bottom half: 1D profile around the lower midline
        middle = self.canvas.height * 3 / 4
        scale = (self.canvas.height / 4 - 20) / 1.0
        ax.axhline(middle, color="#CCCCCC", linewidth=1)
        ax.plot(self.profile_x, middle - self.profile * scale, color="#1E90FF", linewidth=2)

        # Wavelength marker
        wavelength = self.parameters["wavelength"]
        marker_y = self.canvas.height - 25
        ax.plot([50, 50 + wavelength], [marker_y, marker_y], color="#333333", linewidth=1)
        drawing.draw_label(ax, 50, marker_y + 15, f"λ = {wavelength:.0f} px")
        drawing.draw_label(ax, 10, self.canvas.height / 2 + 16, f"波の種類: {WAVE_TYPE_NAMES[self.wave_type]}")
