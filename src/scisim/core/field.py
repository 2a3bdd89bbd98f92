"""
Scalar wave fields sampled on a fixed 2D grid.

Fields are recomputed from scratch every frame as a closed-form sum of damped
travelling sinusoids, one per point source:

    value += sin(2π·d/λ - 2π·f·t + φ) · A / (1 + k·d)

and the sum is clipped to [-1, 1]. Nothing is propagated incrementally, so
the field at time t depends only on t and the sources.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable

import numpy as np

# Blue (trough) → white (rest) → red (crest)
WAVE_COLORS = [
    "#0000FF",
    "#3333FF",
    "#6666FF",
    "#9999FF",
    "#FFFFFF",
    "#FF9999",
    "#FF6666",
    "#FF3333",
    "#FF0000",
]


@dataclass
class PointSource:
    """A point emitter of circular waves."""

    x: float
    y: float
    amplitude: float = 1.0
    frequency: float = 1.0  # Hz
    wavelength: float = 100.0  # px
    phase: float = 0.0  # radians
    active: bool = True

    def distance_to(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        return np.hypot(xs - self.x, ys - self.y)

    def phase_at(self, xs: np.ndarray, ys: np.ndarray, time: float) -> np.ndarray:
        """Travelling-wave phase 2π·d/λ - 2π·f·t + φ at the sample points."""
        distance = self.distance_to(xs, ys)
        return (
            2 * np.pi * distance / self.wavelength
            - 2 * np.pi * self.frequency * time
            + self.phase
        )

    def contribution(self, xs: np.ndarray, ys: np.ndarray, time: float, k: float) -> np.ndarray:
        """
        Damped travelling sinusoid from this source at the sample points.

        Args:
            xs, ys: Sample coordinates (broadcastable)
            time: Simulation time in seconds
            k: Attenuation coefficient
        """
        distance = self.distance_to(xs, ys)
        return np.sin(self.phase_at(xs, ys, time)) * self.amplitude * attenuation(distance, k)


def attenuation(distance, k: float = 0.01):
    """Distance damping factor 1 / (1 + k·d)."""
    return 1.0 / (1.0 + k * distance)


def superpose(
    xs: np.ndarray,
    ys: np.ndarray,
    sources: Iterable[PointSource],
    time: float,
    k: float = 0.01,
) -> np.ndarray:
    """
    Sum every active source at the sample points and clip to [-1, 1].

    Args:
        xs, ys: Sample coordinates, e.g. from WaveGrid
        sources: Point sources (inactive ones are skipped)
        time: Simulation time in seconds
        k: Attenuation coefficient

    Returns:
        Field array with the broadcast shape of xs and ys
    """
    total = np.zeros(np.broadcast(xs, ys).shape, dtype=np.float64)
    for source in sources:
        if source.active:
            total += source.contribution(xs, ys, time, k)
    return np.clip(total, -1.0, 1.0)


def wave_color_index(value: float) -> int:
    """Index into WAVE_COLORS for a field value in [-1, 1]."""
    index = int(np.floor((value + 1) * 4))
    return min(max(index, 0), len(WAVE_COLORS) - 1)


def wave_color(value: float) -> str:
    """Hex colour for a field value."""
    return WAVE_COLORS[wave_color_index(value)]


class WaveGrid:
    """
    Cell-centred sample grid covering a canvas region.

    Arrays have shape (ny, nx); row 0 is the top of the canvas.
    """

    def __init__(self, width: float, height: float, cell_size: float):
        if cell_size <= 0:
            msg = f"cell_size must be positive, got {cell_size}"
            raise ValueError(msg)
        self.cell_size = cell_size
        self.nx = max(1, int(width // cell_size))
        self.ny = max(1, int(height // cell_size))
        centers_x = (np.arange(self.nx) + 0.5) * cell_size
        centers_y = (np.arange(self.ny) + 0.5) * cell_size
        self.xs, self.ys = np.meshgrid(centers_x, centers_y)
        self.values = np.zeros((self.ny, self.nx), dtype=np.float64)

    @property
    def shape(self) -> tuple[int, int]:
        """Grid shape (ny, nx)."""
        return self.ny, self.nx

    @property
    def extent(self) -> tuple[float, float, float, float]:
        """imshow extent in canvas pixels (left, right, bottom, top)."""
        return 0.0, self.nx * self.cell_size, self.ny * self.cell_size, 0.0

    def recompute(self, sources: Iterable[PointSource], time: float, k: float) -> np.ndarray:
        """Replace the field with the superposition at the given time."""
        self.values = superpose(self.xs, self.ys, sources, time, k)
        return self.values
