"""
Shared pieces of the mechanics scenarios: trails and energy rows.
"""

from __future__ import annotations
from collections import deque
from typing import ClassVar, Sequence

from scisim.core.simulation import DisplayDatum, Simulation


class MotionSimulation(Simulation):
    """
    Simulation of bodies moving under forces.

    Keeps a bounded trail of recent positions and reports energy rows
    computed from energies(), which every subclass derives from its state.
    """

    trail_length: ClassVar[int] = 50

    def clear_trail(self) -> None:
        self.trail: deque[tuple[float, float]] = deque(maxlen=self.trail_length)

    def record_trail(self, position: Sequence[float]) -> None:
        self.trail.append((float(position[0]), float(position[1])))

    def energy_rows(self) -> list[DisplayDatum]:
        report = self.energies()
        if report is None:
            return []
        return [
            DisplayDatum("potential_energy", "位置エネルギー", f"{report.potential:.2f}", "J"),
            DisplayDatum("kinetic_energy", "運動エネルギー", f"{report.kinetic:.2f}", "J"),
            DisplayDatum("total_energy", "力学的エネルギー", f"{report.total:.2f}", "J"),
        ]
