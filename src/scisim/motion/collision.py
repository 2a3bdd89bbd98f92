"""
Balls bouncing in a box under gravity and linear friction.

Per frame, for each ball:
    v += (g·ŷ - friction·v)·dt
    x += v·dt
then every wall contact and every unordered ball pair is resolved. Distances
are in pixels with 60 px to the metre; the gravity slider is in m/s².

While stopped, a ball can be dragged with the pointer; on release it is
thrown with the last pointer motion.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np
from matplotlib.patches import Rectangle

from scisim.core.parameters import ParameterSpec
from scisim.core.simulation import DisplayDatum, EnergyReport
from scisim.core.vectors import magnitude, vec
from scisim.motion.base import MotionSimulation
from scisim.motion.bodies import Body, reflect_off_walls, resolve_all, total_momentum
from scisim.viz import drawing

if TYPE_CHECKING:
    from matplotlib.axes import Axes

PIXELS_PER_METER = 60.0
FRAME_RATE = 60.0  # friction is a per-frame velocity fraction at this rate
BALL_RADIUS = 30.0
MAX_PLACEMENT_ATTEMPTS = 100
INITIAL_SPEED = 2.0  # m/s, per component
THROW_SCALE = 0.2  # m/s per pixel of pointer motion

BALL_COLORS = [
    "#FF6B6B",
    "#4ECDC4",
    "#45B7D1",
    "#FFA07A",
    "#98D8C8",
    "#F7DC6F",
    "#BB8FCE",
    "#85C1E9",
    "#F8B88B",
    "#82E0AA",
]


class CollisionSimulation(MotionSimulation):
    """
    N balls with mass-weighted elastic/inelastic collisions.

    Args:
        canvas: Canvas size
        seed: Seed for ball placement; reset() replays the same layout
    """

    scenario_id = "collision"
    title = "弾性衝突"
    description = "複数の球の衝突と運動量の保存を観察します。"

    def __init__(self, canvas=None, seed: int | None = 0):
        self.seed = seed
        self._dragged: int | None = None
        self._last_pointer: np.ndarray | None = None
        self._pointer_delta = np.zeros(2)
        self._grab_offset = np.zeros(2)  # ball centre minus pointer at press
        super().__init__(canvas)

    @classmethod
    def define_parameters(cls) -> list[ParameterSpec]:
        return [
            ParameterSpec("restitution", "反発係数", 0, 1, 0.01, 0.9, ""),
            ParameterSpec("gravity", "重力", 0, 10, 0.1, 0.5, "m/s²"),
            ParameterSpec("friction", "摩擦係数", 0, 0.1, 0.001, 0.005, ""),
            ParameterSpec("ball_count", "ボールの数", 2, 10, 1, 5, "個"),
        ]

    def initialize_state(self) -> None:
        rng = np.random.default_rng(self.seed)
        self.balls: list[Body] = []
        count = int(self.parameters["ball_count"])
        for i in range(count):
            ball = self._place_ball(rng, i)
            if ball is not None:
                self.balls.append(ball)
        self._dragged = None

    def _place_ball(self, rng: np.random.Generator, index: int) -> Body | None:
        radius = BALL_RADIUS * rng.uniform(0.7, 1.3)
        mass = (radius / BALL_RADIUS) ** 2
        width, height = self.canvas.width, self.canvas.height

        for _ in range(MAX_PLACEMENT_ATTEMPTS):
            position = vec(rng.uniform(radius, width - radius), rng.uniform(radius, height - radius))
            candidate = Body(
                position=position,
                velocity=rng.uniform(-INITIAL_SPEED, INITIAL_SPEED, size=2) * PIXELS_PER_METER,
                mass=mass,
                radius=radius,
                color=BALL_COLORS[index % len(BALL_COLORS)],
            )
            if not any(candidate.overlaps(other) for other in self.balls):
                return candidate
        return None

    def on_parameter_changed(self, param_id: str, value: float) -> None:
        if param_id == "ball_count":
            self.rebuild()

    @property
    def gravity_px(self) -> float:
        """Gravity in px/s²."""
        return self.parameters["gravity"] * PIXELS_PER_METER

    def step(self, dt: float) -> None:
        gravity = vec(0.0, self.gravity_px)
        friction = self.parameters["friction"] * FRAME_RATE
        restitution = self.parameters["restitution"]
        resting_speed = self.gravity_px * dt * (1 + 1e-9)

        for i, ball in enumerate(self.balls):
            if i == self._dragged:
                continue
            ball.velocity += (gravity - friction * ball.velocity) * dt
            ball.position += ball.velocity * dt
            reflect_off_walls(ball, self.canvas.width, self.canvas.height, restitution, resting_speed)

        resolve_all(self.balls, restitution)

    # ---- energy ------------------------------------------------------------

    def energies(self) -> EnergyReport:
        g = self.parameters["gravity"]
        kinetic = 0.0
        potential = 0.0
        for ball in self.balls:
            speed = magnitude(ball.velocity) / PIXELS_PER_METER
            kinetic += 0.5 * ball.mass * speed**2
            # Height above the floor in metres
            height = (self.canvas.height - ball.radius - ball.position[1]) / PIXELS_PER_METER
            potential += ball.mass * g * height
        return EnergyReport(kinetic=kinetic, potential=potential)

    def compute_display(self) -> list[DisplayDatum]:
        momentum = magnitude(total_momentum(self.balls)) / PIXELS_PER_METER
        rows = super().compute_display()
        rows += [
            DisplayDatum("ball_count", "ボール数", f"{len(self.balls)}", "個"),
            DisplayDatum("momentum", "運動量", f"{momentum:.2f}", "kg·m/s"),
        ]
        return rows + self.energy_rows()

    # ---- pointer -----------------------------------------------------------

    def ball_at(self, x: float, y: float) -> int | None:
        point = vec(x, y)
        for i, ball in enumerate(self.balls):
            if magnitude(ball.position - point) <= ball.radius:
                return i
        return None

    def on_press(self, x: float, y: float) -> None:
        if self.is_running:
            return
        self._dragged = self.ball_at(x, y)
        self._last_pointer = vec(x, y)
        self._pointer_delta = np.zeros(2)
        if self._dragged is not None:
            self._grab_offset = self.balls[self._dragged].position - self._last_pointer

    def on_drag(self, x: float, y: float) -> None:
        if self._dragged is None or self._last_pointer is None:
            return
        pointer = vec(x, y)
        self._pointer_delta = pointer - self._last_pointer
        self._last_pointer = pointer
        ball = self.balls[self._dragged]
        ball.position = pointer + self._grab_offset
        ball.velocity = np.zeros(2)
        reflect_off_walls(ball, self.canvas.width, self.canvas.height, 0.0)
        self.refresh_display()

    def on_release(self, x: float, y: float) -> None:
        if self._dragged is None:
            return
        ball = self.balls[self._dragged]
        ball.velocity = self._pointer_delta * THROW_SCALE * PIXELS_PER_METER
        self._dragged = None
        self._last_pointer = None
        self.refresh_display()

    # ---- drawing -----------------------------------------------------------

    def draw(self, ax: "Axes") -> None:
        drawing.prepare_canvas(ax, self.canvas)
        ax.add_patch(
            Rectangle(
                (0, 0), self.canvas.width, self.canvas.height, facecolor="none", edgecolor="#333333", linewidth=2
            )
        )
        for i, ball in enumerate(self.balls):
            drawing.draw_ball(ax, ball.position, ball.radius, color=ball.color, alpha=0.6 if i == self._dragged else 1.0)
            drawing.draw_vector(ax, ball.position, ball.velocity, scale=0.3, color="#333333")
            drawing.draw_label(ax, ball.position[0], ball.position[1], f"{ball.mass:.1f}", ha="center", va="center")

        report = self.energies()
        drawing.draw_energy_bar(ax, 20, 30, 200, report.kinetic, report.potential)
