"""
Small helpers for 2-vectors stored as numpy arrays of shape (2,).
"""

from __future__ import annotations
import numpy as np

EPS = 1e-12


def vec(x: float, y: float) -> np.ndarray:
    """Create a float 2-vector."""
    return np.array([x, y], dtype=np.float64)


def magnitude(v: np.ndarray) -> float:
    """Euclidean length of v."""
    return float(np.hypot(v[0], v[1]))

