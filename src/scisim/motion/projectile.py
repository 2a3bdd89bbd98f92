"""
Projectile launched from the lower-left corner.

The measured apex and range are tracked alongside the drag-free theory:
    H = v0² sin²θ / (2g)
    R = v0² sin 2θ / g
The flight ends on the ground line or when the ball leaves the canvas.
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
LAUNCH_X = 50.0
LAUNCH_MARGIN = 50.0
BALL_RADIUS = 12.0


def theoretical_max_height(v0: float, angle_deg: float, g: float) -> float:
    theta = np.radians(angle_deg)
    return v0**2 * np.sin(theta) ** 2 / (2 * g)


def theoretical_range(v0: float, angle_deg: float, g: float) -> float:
    theta = np.radians(angle_deg)
    return v0**2 * np.sin(2 * theta) / g


class ProjectileSimulation(MotionSimulation):
    """Oblique launch with optional quadratic drag."""

    scenario_id = "projectile"
    title = "弾道運動"
    description = "斜めに投げ上げた物体の軌道を観察します。"
    trail_length = 100

    @classmethod
    def define_parameters(cls) -> list[ParameterSpec]:
        return [
            ParameterSpec("gravity", "重力加速度", 1, 20, 0.1, 9.8, "m/s²"),
            ParameterSpec("initial_velocity", "初速度", 10, 100, 1, 40, "m/s"),
            ParameterSpec("angle", "発射角度", 0, 90, 1, 45, "°"),
            ParameterSpec("mass", "質量", 0.1, 10, 0.1, 1, "kg"),
            ParameterSpec("air_resistance", "空気抵抗係数", 0, 0.1, 0.001, 0, ""),
        ]

    @property
    def ground_y(self) -> float:
        return self.canvas.height - GROUND_MARGIN

    def initialize_state(self) -> None:
        v0 = self.parameters["initial_velocity"]
        theta = np.radians(self.parameters["angle"])

        self.radius = BALL_RADIUS
        self.launch_point = vec(LAUNCH_X, self.canvas.height - LAUNCH_MARGIN)
        self.position = self.launch_point.copy()
        # Screen y grows downward, so "up" is negative
        self.velocity = vec(v0 * np.cos(theta), -v0 * np.sin(theta))
        self.acceleration = vec(0.0, self.parameters["gravity"])
        self.max_height = 0.0
        self.distance = 0.0
        self.landed = False
        self.clear_trail()
        self.record_trail(self.position)

    def on_parameter_changed(self, param_id: str, value: float) -> None:
        self.rebuild()

    def step(self, dt: float) -> None:
        acceleration = vec(0.0, self.parameters["gravity"])
        k = self.parameters["air_resistance"]
        if k > 0:
            acceleration -= k * self.velocity * magnitude(self.velocity) / self.parameters["mass"]
        self.acceleration = acceleration

        self.velocity += self.acceleration * dt
        self.position += self.velocity * dt

        self.max_height = max(self.max_height, self.launch_point[1] - self.position[1])
        self.distance = self.position[0] - self.launch_point[0]

        resting_y = self.ground_y - self.radius
        if self.position[1] >= resting_y:
            self.position[1] = resting_y
            self.velocity[:] = 0.0
            self.landed = True
            self.stop()
        elif not 0 <= self.position[0] <= self.canvas.width:
            self.stop()

        self.record_trail(self.position)

    @property
    def height(self) -> float:
        return max(0.0, self.ground_y - self.position[1] - self.radius)

    def energies(self) -> EnergyReport:
        m = self.parameters["mass"]
        g = self.parameters["gravity"]
        return EnergyReport(kinetic=0.5 * m * magnitude(self.velocity) ** 2, potential=m * g * self.height)

    def compute_display(self) -> list[DisplayDatum]:
        v0 = self.parameters["initial_velocity"]
        angle = self.parameters["angle"]
        g = self.parameters["gravity"]
        rows = super().compute_display()
        rows += [
            DisplayDatum("vx", "水平速度", f"{self.velocity[0]:.2f}", "m/s"),
            DisplayDatum("vy", "垂直速度", f"{-self.velocity[1]:.2f}", "m/s"),
            DisplayDatum("max_height", "最高到達点", f"{self.max_height:.2f}", "m"),
            DisplayDatum("distance", "水平距離", f"{self.distance:.2f}", "m"),
            DisplayDatum("theoretical_max_height", "理論最高点", f"{theoretical_max_height(v0, angle, g):.2f}", "m"),
            DisplayDatum("theoretical_range", "理論到達距離", f"{theoretical_range(v0, angle, g):.2f}", "m"),
        ]
        return rows + self.energy_rows()

    def draw(self, ax: "Axes") -> None:
        drawing.prepare_canvas(ax, self.canvas)
        drawing.draw_ground(ax, self.canvas, self.ground_y)

        # Launch direction indicator
        theta = np.radians(self.parameters["angle"])
        direction = vec(np.cos(theta), -np.sin(theta))
        drawing.draw_vector(ax, self.launch_point, direction, scale=40.0, color="#999999")

        drawing.draw_trail(ax, list(self.trail))
        drawing.draw_ball(ax, self.position, self.radius)
        drawing.draw_vector(ax, self.position, vec(self.velocity[0], 0.0), scale=1.0, color="#1E90FF", label="vx")
        drawing.draw_vector(ax, self.position, vec(0.0, self.velocity[1]), scale=1.0, color="#FF8C00", label="vy")

        report = self.energies()
        drawing.draw_energy_bar(ax, 20, 30, 200, report.kinetic, report.potential)
