"""
Analysis layer: headless runs and measured-vs-theory comparisons.

Nothing here feeds back into a simulation; it only drives update() and
reads state.

- record_series / record_energy: sample observables frame by frame
- fit_line: least-squares slope (e.g. g from v(t) in free fall)
- measure_period: period from successive maxima
- exact_pendulum_period: large-amplitude period via the elliptic integral
"""

from scisim.analysis.energy import EnergyTrace, LinearFit, fit_line, record_energy, record_series
from scisim.analysis.comparison import (
    ComparisonResult,
    compare,
    exact_pendulum_period,
    measure_period,
)

__all__ = [
    "EnergyTrace",
    "LinearFit",
    "fit_line",
    "record_energy",
    "record_series",
    "ComparisonResult",
    "compare",
    "exact_pendulum_period",
    "measure_period",
]
