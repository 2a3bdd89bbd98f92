"""
Simple pendulum with linear angular damping.

Integration (semi-implicit Euler on the angle):
    α = -(g/L)·sin θ - c·ω
    ω += α·dt
    θ += ω·dt

The period is measured from reversals of the angular velocity: a reversal
is flagged when ω_prev·ω <= 0 with ω_prev != 0, consecutive reversals are
half a period apart.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from scisim.core.parameters import ParameterSpec
from scisim.core.simulation import DisplayDatum, EnergyReport
from scisim.core.vectors import vec
from scisim.motion.base import MotionSimulation
from scisim.viz import drawing

if TYPE_CHECKING:
    from matplotlib.axes import Axes

PIVOT_Y = 100.0
BOB_RADIUS = 20.0
SMALL_ANGLE_LIMIT = 10.0  # degrees


def small_angle_period(length: float, gravity: float) -> float:
    """T = 2π√(L/g)."""
    return 2 * np.pi * np.sqrt(length / gravity)


def corrected_period(length: float, gravity: float, amplitude_deg: float) -> float:
    """Small-angle period with the first-order amplitude correction above 10°."""
    period = small_angle_period(length, gravity)
    if amplitude_deg < SMALL_ANGLE_LIMIT:
        return period
    theta0 = np.radians(amplitude_deg)
    return period * (1 + (theta0 / 2) ** 2 / 4)


class PendulumSimulation(MotionSimulation):
    """A bob on a massless rod swinging about a fixed pivot."""

    scenario_id = "pendulum"
    title = "振り子運動"
    description = "単振り子の周期と力学的エネルギーを観察します。"
    trail_length = 150

    @classmethod
    def define_parameters(cls) -> list[ParameterSpec]:
        return [
            ParameterSpec("gravity", "重力加速度", 1, 20, 0.1, 9.8, "m/s²"),
            ParameterSpec("length", "振り子の長さ", 50, 300, 10, 150, "m"),
            ParameterSpec("initial_angle", "初期角度", 5, 80, 1, 30, "°"),
            ParameterSpec("mass", "質量", 0.1, 10, 0.1, 1, "kg"),
            ParameterSpec("damping", "減衰係数", 0, 0.1, 0.001, 0, ""),
        ]

    def initialize_state(self) -> None:
        self.pivot = vec(self.canvas.width / 2, PIVOT_Y)
        self.angle = float(np.radians(self.parameters["initial_angle"]))
        self.angular_velocity = 0.0
        self.angular_acceleration = 0.0
        self.radius = BOB_RADIUS

        self.reversals = 0
        self.last_reversal_time: float | None = None
        self.measured_period: float | None = None

        self.clear_trail()
        self.record_trail(self.bob_position)

    def on_parameter_changed(self, param_id: str, value: float) -> None:
        self.rebuild()

    @property
    def length(self) -> float:
        return self.parameters["length"]

    @property
    def bob_position(self) -> np.ndarray:
        return self.pivot + self.length * vec(np.sin(self.angle), np.cos(self.angle))

    def step(self, dt: float) -> None:
        g = self.parameters["gravity"]
        damping = self.parameters["damping"]
        previous = self.angular_velocity

        self.angular_acceleration = -(g / self.length) * np.sin(self.angle) - damping * self.angular_velocity
        self.angular_velocity += self.angular_acceleration * dt
        self.angle += self.angular_velocity * dt

        if previous != 0 and previous * self.angular_velocity <= 0:
            self._record_reversal()

        self.record_trail(self.bob_position)

    def _record_reversal(self) -> None:
        self.reversals += 1
        if self.last_reversal_time is not None:
            self.measured_period = 2 * (self.time - self.last_reversal_time)
        self.last_reversal_time = self.time

    @property
    def theoretical_period(self) -> float:
        return corrected_period(self.length, self.parameters["gravity"], self.parameters["initial_angle"])

    @property
    def height(self) -> float:
        """Height of the bob above its lowest point."""
        return self.pivot[1] + self.length - self.bob_position[1]

    def energies(self) -> EnergyReport:
        m = self.parameters["mass"]
        g = self.parameters["gravity"]
        speed = self.angular_velocity * self.length
        return EnergyReport(kinetic=0.5 * m * speed**2, potential=m * g * self.height)

    def compute_display(self) -> list[DisplayDatum]:
        measured = f"{self.measured_period:.2f}" if self.measured_period is not None else "-"
        rows = super().compute_display()
        rows += [
            DisplayDatum("angle", "角度", f"{np.degrees(self.angle):.2f}", "°"),
            DisplayDatum("angular_velocity", "角速度", f"{self.angular_velocity:.3f}", "rad/s"),
            DisplayDatum("measured_period", "測定周期", measured, "秒"),
            DisplayDatum("theoretical_period", "理論周期", f"{self.theoretical_period:.2f}", "秒"),
        ]
        return rows + self.energy_rows()

    def draw(self, ax: "Axes") -> None:
        drawing.prepare_canvas(ax, self.canvas)
        bob = self.bob_position

        # Rest position and swing arc
        ax.plot(
            [self.pivot[0], self.pivot[0]],
            [self.pivot[1], self.pivot[1] + self.length],
            color="#CCCCCC",
            linestyle="--",
            linewidth=1,
        )
        amplitude = np.radians(self.parameters["initial_angle"])
        arc = np.linspace(-amplitude, amplitude, 60)
        ax.plot(
            self.pivot[0] + self.length * np.sin(arc),
            self.pivot[1] + self.length * np.cos(arc),
            color="#DDDDDD",
            linewidth=1,
        )

        drawing.draw_trail(ax, list(self.trail))
        ax.plot([self.pivot[0], bob[0]], [self.pivot[1], bob[1]], color="#333333", linewidth=2, zorder=2)
        drawing.draw_ball(ax, self.pivot, 5, color="#333333")
        drawing.draw_ball(ax, bob, self.radius)

        tangent = vec(np.cos(self.angle), -np.sin(self.angle))
        drawing.draw_vector(ax, bob, tangent * self.angular_velocity * self.length, scale=2.0, label="v")

        report = self.energies()
        drawing.draw_energy_bar(ax, 20, 30, 200, report.kinetic, report.potential)
