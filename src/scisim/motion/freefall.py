"""
Free fall with optional quadratic air drag.

The ball starts at rest initial_height pixels above the bottom of the canvas
and falls toward a ground line 30 px above the bottom edge. Drag is
-k·v·|v|/m. On reaching the ground the ball is clamped onto it, its velocity
is zeroed and the simulation stops.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from scisim.core.parameters import ParameterSpec
from scisim.core.simulation import DisplayDatum, EnergyReport
from scisim.core.vectors import magnitude, vec
from scisim.motion.base import MotionSimulation
from scisim.viz import drawing

if TYPE_CHECKING:
    from matplotlib.axes import Axes

GROUND_MARGIN = 30.0
BALL_RADIUS = 15.0


class FreeFallSimulation(MotionSimulation):
    """A single ball dropped from rest."""

    scenario_id = "freefall"
    title = "自由落下"
    description = "重力によって物体が落下する様子を観察します。"
    trail_length = 50

    @classmethod
    def define_parameters(cls) -> list[ParameterSpec]:
        return [
            ParameterSpec("gravity", "重力加速度", 1, 20, 0.1, 9.8, "m/s²"),
            ParameterSpec("initial_height", "初期高さ", 50, 400, 10, 300, "m"),
            ParameterSpec("mass", "質量", 1, 10, 0.1, 1, "kg"),
            ParameterSpec("air_resistance", "空気抵抗係数", 0, 0.5, 0.01, 0, ""),
        ]

    @property
    def ground_y(self) -> float:
        return self.canvas.height - GROUND_MARGIN

    def initialize_state(self) -> None:
        self.radius = BALL_RADIUS
        self.position = vec(self.canvas.width / 2, self.canvas.height - self.parameters["initial_height"])
        self.velocity = np.zeros(2)
        self.acceleration = vec(0.0, self.parameters["gravity"])
        self.landed = False
        self.clear_trail()
        self.record_trail(self.position)

    def on_parameter_changed(self, param_id: str, value: float) -> None:
        if param_id == "initial_height":
            self.rebuild()
        elif not self.landed:
            self.acceleration = self._acceleration()

    def _acceleration(self) -> np.ndarray:
        acceleration = vec(0.0, self.parameters["gravity"])
        k = self.parameters["air_resistance"]
        if k > 0:
            acceleration -= k * self.velocity * magnitude(self.velocity) / self.parameters["mass"]
        return acceleration

    def step(self, dt: float) -> None:
        self.acceleration = self._acceleration()
        self.velocity += self.acceleration * dt
        self.position += self.velocity * dt

        resting_y = self.ground_y - self.radius
        if self.position[1] >= resting_y:
            self.position[1] = resting_y
            self.velocity[:] = 0.0
            self.acceleration[:] = 0.0
            self.landed = True
            self.stop()

        self.record_trail(self.position)

    @property
    def height(self) -> float:
        """Height of the ball's bottom above the ground line."""
        return max(0.0, self.ground_y - self.position[1] - self.radius)

    def energies(self) -> EnergyReport:
        m = self.parameters["mass"]
        g = self.parameters["gravity"]
        speed = magnitude(self.velocity)
        return EnergyReport(kinetic=0.5 * m * speed**2, potential=m * g * self.height)

    def compute_display(self) -> list[DisplayDatum]:
        rows = super().compute_display()
        rows += [
            DisplayDatum("height", "高さ", f"{self.height:.2f}", "m"),
            DisplayDatum("speed", "速度", f"{magnitude(self.velocity):.2f}", "m/s"),
            DisplayDatum("acceleration", "加速度", f"{magnitude(self.acceleration):.2f}", "m/s²"),
        ]
        return rows + self.energy_rows()

    def draw(self, ax: "Axes") -> None:
        drawing.prepare_canvas(ax, self.canvas)
        drawing.draw_ground(ax, self.canvas, self.ground_y)

        # Height guide from the ground to the ball
        x = self.position[0] + self.radius + 20
        ax.plot([x, x], [self.ground_y, self.position[1] + self.radius], color="#888888", linestyle="--", linewidth=1)
        drawing.draw_label(ax, x + 5, (self.ground_y + self.position[1]) / 2, f"h = {self.height:.1f} m")

        drawing.draw_trail(ax, list(self.trail))
        drawing.draw_ball(ax, self.position, self.radius)
        drawing.draw_vector(ax, self.position, self.velocity, scale=2.0, color=drawing.COLOR_VELOCITY, label="v")
        drawing.draw_vector(ax, self.position, self.acceleration, scale=5.0, color=drawing.COLOR_ACCELERATION, label="a")

        report = self.energies()
        drawing.draw_energy_bar(ax, 20, 30, 200, report.kinetic, report.potential)
