"""
Block sliding down an inclined plane with Coulomb friction.

The plane is 0.8·min(width, height) long, centred on the canvas and rises to
the right at the slope angle. The block starts at the top end and slides
toward the bottom end, where the run stops.

Motion is along the plane only:
    a = -g·sin θ - sign(v)·μ·g·cos θ     (friction only while moving)
and the position is projected back onto the plane after every step. When
gravity along the slope cannot beat static friction (g·sin θ <= μ·g·cos θ)
and the block is slower than 0.1, it is held at rest. That threshold is a
teaching simplification, not a derived static-friction model.
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

BLOCK_RADIUS = 15.0
PLANE_FRACTION = 0.8
REST_SPEED = 0.1


class InclinedPlaneSimulation(MotionSimulation):
    """Slide down a slope with kinetic and (heuristic) static friction."""

    scenario_id = "inclined_plane"
    title = "斜面上の運動"
    description = "斜面を滑り降りる物体に働く力を観察します。"
    trail_length = 100

    @classmethod
    def define_parameters(cls) -> list[ParameterSpec]:
        return [
            ParameterSpec("angle", "斜面の角度", 5, 60, 1, 30, "°"),
            ParameterSpec("gravity", "重力加速度", 1, 20, 0.1, 9.8, "m/s²"),
            ParameterSpec("mass", "質量", 0.1, 10, 0.1, 1, "kg"),
            ParameterSpec("friction_coef", "摩擦係数", 0, 1, 0.01, 0.2, ""),
            ParameterSpec("initial_velocity", "初速度", 0, 20, 0.5, 0, "m/s"),
        ]

    def initialize_state(self) -> None:
        theta = np.radians(self.parameters["angle"])
        self.theta = float(theta)
        self.plane_length = PLANE_FRACTION * min(self.canvas.width, self.canvas.height)

        center = vec(*self.canvas.center)
        # Up-slope direction and outward normal in screen coordinates
        self.along = vec(np.cos(theta), -np.sin(theta))
        self.normal = vec(-np.sin(theta), -np.cos(theta))
        self.plane_start = center - self.along * self.plane_length / 2
        self.plane_end = center + self.along * self.plane_length / 2

        self.radius = BLOCK_RADIUS
        self.position = self._point_at(self.plane_length)
        self.velocity = -self.along * self.parameters["initial_velocity"]
        self.acceleration = np.zeros(2)
        self.at_rest = False
        self.clear_trail()
        self.record_trail(self.position)

    def on_parameter_changed(self, param_id: str, value: float) -> None:
        self.rebuild()

    def _point_at(self, s: float) -> np.ndarray:
        """Block centre when its contact point is s along the plane."""
        return self.plane_start + self.along * s + self.normal * self.radius

    @property
    def distance_along_plane(self) -> float:
        """Distance of the contact point from the bottom end."""
        return float((self.position - self.plane_start) @ self.along)

    def step(self, dt: float) -> None:
        g = self.parameters["gravity"]
        mu = self.parameters["friction_coef"]
        g_parallel = g * np.sin(self.theta)
        friction_limit = mu * g * np.cos(self.theta)

        v_along = float(self.velocity @ self.along)
        speed = abs(v_along)

        a_along = -g_parallel
        if speed > 0:
            a_along -= np.sign(v_along) * friction_limit
        self.acceleration = self.along * a_along

        v_along += a_along * dt
        self.at_rest = g_parallel <= friction_limit and speed < REST_SPEED
        if self.at_rest:
            v_along = 0.0
        self.velocity = self.along * v_along

        previous = self.position.copy()
        self.position = self.position + self.velocity * dt
        s = self._constrain_to_plane()

        if not np.array_equal(previous, self.position):
            self.record_trail(self.position)

        if s <= 0:
            self.velocity = np.zeros(2)
            self.stop()

    def _constrain_to_plane(self) -> float:
        """Project the block back onto the plane; returns the clamped distance."""
        s = self.distance_along_plane
        clamped = min(max(s, 0.0), self.plane_length)
        if clamped != s and clamped == self.plane_length and self.velocity @ self.along > 0:
            self.velocity = np.zeros(2)
        self.position = self._point_at(clamped)
        return clamped

    # ---- forces and energy -------------------------------------------------

    def forces(self) -> dict[str, float]:
        """Magnitudes of the forces acting on the block (N)."""
        m = self.parameters["mass"]
        g = self.parameters["gravity"]
        mu = self.parameters["friction_coef"]
        normal = m * g * np.cos(self.theta)
        parallel = m * g * np.sin(self.theta)
        friction = min(parallel, mu * normal) if self.at_rest else mu * normal
        return {
            "normal": normal,
            "parallel": parallel,
            "friction": friction,
            "net": max(0.0, parallel - friction),
        }

    def energies(self) -> EnergyReport:
        m = self.parameters["mass"]
        g = self.parameters["gravity"]
        height = self.distance_along_plane * np.sin(self.theta)
        speed = float(np.hypot(*self.velocity))
        return EnergyReport(kinetic=0.5 * m * speed**2, potential=m * g * height)

    def compute_display(self) -> list[DisplayDatum]:
        forces = self.forces()
        speed = float(np.hypot(*self.velocity))
        rows = super().compute_display()
        rows += [
            DisplayDatum("distance", "斜面上の位置", f"{self.distance_along_plane:.2f}", "m"),
            DisplayDatum("speed", "速度", f"{speed:.2f}", "m/s"),
            DisplayDatum("normal_force", "垂直抗力", f"{forces['normal']:.2f}", "N"),
            DisplayDatum("parallel_force", "斜面方向の重力", f"{forces['parallel']:.2f}", "N"),
            DisplayDatum("friction_force", "摩擦力", f"{forces['friction']:.2f}", "N"),
            DisplayDatum("net_force", "合力", f"{forces['net']:.2f}", "N"),
        ]
        return rows + self.energy_rows()

    def draw(self, ax: "Axes") -> None:
        drawing.prepare_canvas(ax, self.canvas)

        # Plane as a filled right triangle under the slope
        corner = vec(self.plane_end[0], self.plane_start[1])
        triangle = np.array([self.plane_start, self.plane_end, corner])
        ax.fill(triangle[:, 0], triangle[:, 1], color="#D2B48C", edgecolor="#8B7355", zorder=1)
        drawing.draw_label(ax, self.plane_start[0] + 40, self.plane_start[1] - 8, f"{self.parameters['angle']:.0f}°")

        drawing.draw_trail(ax, list(self.trail))
        drawing.draw_ball(ax, self.position, self.radius, color="#CD5C5C")

        forces = self.forces()
        m = self.parameters["mass"]
        scale = 3.0 / max(m, 1e-9)
        drawing.draw_vector(ax, self.position, -self.normal * forces["normal"], scale=scale, color="#8A2BE2", label="mg cosθ")
        drawing.draw_vector(ax, self.position, self.normal * forces["normal"], scale=scale, color="#228B22", label="N")
        drawing.draw_vector(ax, self.position, -self.along * forces["parallel"], scale=scale, color=drawing.COLOR_ACCELERATION, label="mg sinθ")
        drawing.draw_vector(ax, self.position, self.along * forces["friction"], scale=scale, color="#FF8C00", label="f")

        report = self.energies()
        drawing.draw_energy_bar(ax, 20, 30, 200, report.kinetic, report.potential)
