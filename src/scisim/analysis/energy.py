"""
Headless recording of simulation observables.

These helpers drive a Simulation without any rendering: start it, call
update() a fixed number of times, and read an observable after each frame.
The simulation is left in whatever state the last frame produced.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

import numpy as np
from scipy import stats

if TYPE_CHECKING:
    from scisim.core.simulation import Simulation


@dataclass
class EnergyTrace:
    """Mechanical energy sampled once per frame."""

    times: np.ndarray
    kinetic: np.ndarray
    potential: np.ndarray

    @property
    def total(self) -> np.ndarray:
        return self.kinetic + self.potential

    def relative_drift(self) -> float:
        """
        Largest deviation of total energy from its first sample, relative
        to that sample. Zero if the initial total is zero.
        """
        total = self.total
        if len(total) == 0 or abs(total[0]) < 1e-12:
            return 0.0
        return float(np.max(np.abs(total - total[0])) / abs(total[0]))


@dataclass
class LinearFit:
    """Least-squares line through a recorded series."""

    slope: float
    intercept: float
    r_squared: float


def record_series(
    simulation: "Simulation",
    steps: int,
    observable: Callable[["Simulation"], float],
) -> tuple[np.ndarray, np.ndarray]:
    """
    Run a simulation headless and sample an observable after every frame.

    Sampling stops early if the simulation stops itself (e.g. on landing).

    Args:
        simulation: Simulation to drive (started if stopped)
        steps: Maximum number of frames
        observable: Function of the simulation returning the sampled value

    Returns:
        (times, values) arrays, including the sample at the starting time
    """
    simulation.start()
    times = [simulation.time]
    values = [observable(simulation)]
    for _ in range(steps):
        if not simulation.is_running:
            break
        simulation.update()
        times.append(simulation.time)
        values.append(observable(simulation))
    return np.array(times), np.array(values, dtype=np.float64)


def record_energy(simulation: "Simulation", steps: int) -> EnergyTrace:
    """
    Record kinetic and potential energy over a headless run.

    Raises:
        ValueError: The simulation does not report mechanical energy
    """
    if simulation.energies() is None:
        msg = f"{type(simulation).__name__} does not report mechanical energy"
        raise ValueError(msg)
    simulation.start()
    times = [simulation.time]
    reports = [simulation.energies()]
    for _ in range(steps):
        if not simulation.is_running:
            break
        simulation.update()
        times.append(simulation.time)
        reports.append(simulation.energies())
    return EnergyTrace(
        times=np.array(times),
        kinetic=np.array([r.kinetic for r in reports], dtype=np.float64),
        potential=np.array([r.potential for r in reports], dtype=np.float64),
    )


def fit_line(times: np.ndarray, values: np.ndarray) -> LinearFit:
    """Fit values ≈ slope·t + intercept, e.g. speed against time in free fall."""
    result = stats.linregress(times, values)
    return LinearFit(
        slope=float(result.slope),
        intercept=float(result.intercept),
        r_squared=float(result.rvalue**2),
    )
