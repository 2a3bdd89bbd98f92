"""
Compare measured quantities with their theoretical values.

The pendulum shown on screen uses the small-angle period with a first-order
amplitude correction. The exact large-amplitude period is

    T = 4·√(L/g)·K(m),   m = sin²(θ0/2)

with K the complete elliptic integral of the first kind, which scipy
provides as ellipk(m).
"""

from __future__ import annotations
from dataclasses import dataclass

import numpy as np
from scipy.signal import find_peaks
from scipy.special import ellipk


@dataclass
class ComparisonResult:
    """A measured value next to its theoretical counterpart."""

    name: str
    measured: float
    theoretical: float

    @property
    def absolute_error(self) -> float:
        return abs(self.measured - self.theoretical)

    @property
    def relative_error(self) -> float:
        if self.theoretical == 0:
            return float("inf") if self.measured != 0 else 0.0
        return self.absolute_error / abs(self.theoretical)

    def agrees(self, tolerance: float = 0.05) -> bool:
        """True if the relative error is within tolerance."""
        return self.relative_error <= tolerance


def exact_pendulum_period(length: float, gravity: float, amplitude_deg: float) -> float:
    """
    Period of a frictionless pendulum released from rest at any amplitude.

    Args:
        length: Rod length
        gravity: Gravitational acceleration (same length unit per s²)
        amplitude_deg: Release angle in degrees, below 180
    """
    if length <= 0 or gravity <= 0:
        msg = f"length and gravity must be positive, got {length}, {gravity}"
        raise ValueError(msg)
    m = np.sin(np.radians(amplitude_deg) / 2) ** 2
    return float(4 * np.sqrt(length / gravity) * ellipk(m))


def measure_period(times: np.ndarray, signal: np.ndarray) -> float:
    """
    Mean spacing of successive maxima of a periodic signal.

    Args:
        times: Sample times, evenly spaced
        signal: Sampled values

    Returns:
        Period in the units of times

    Raises:
        ValueError: Fewer than two maxima in the signal
    """
    times = np.asarray(times, dtype=np.float64)
    peaks, _ = find_peaks(np.asarray(signal, dtype=np.float64))
    if len(peaks) < 2:
        msg = f"Need at least two maxima to measure a period, found {len(peaks)}"
        raise ValueError(msg)
    return float(np.mean(np.diff(times[peaks])))


def compare(name: str, measured: float, theoretical: float) -> ComparisonResult:
    return ComparisonResult(name=name, measured=float(measured), theoretical=float(theoretical))
