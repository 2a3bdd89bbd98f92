"""
Canvas drawing helpers used by Simulation.draw().

Simulations work in screen-like pixel coordinates (origin top-left, y down),
so prepare_canvas() flips the y axis of the target Axes to match. All helpers
only add artists; none of them touch simulation state.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Sequence

import numpy as np
from matplotlib.patches import Circle, Rectangle

if TYPE_CHECKING:
    from matplotlib.axes import Axes

    from scisim.core.simulation import CanvasConfig

# Palette
COLOR_BODY = "#4682B4"
COLOR_GROUND = "#8B7355"
COLOR_TRAIL = "#4682B4"
COLOR_VELOCITY = "#2E8B57"
COLOR_ACCELERATION = "#DC143C"
COLOR_KINETIC = "#FF6347"
COLOR_POTENTIAL = "#4169E1"
COLOR_TEXT = "#333333"


def prepare_canvas(ax: "Axes", canvas: "CanvasConfig", background: str | None = None) -> None:
    """Clear ax and set it up as a width x height pixel canvas."""
    ax.clear()
    ax.set_xlim(0, canvas.width)
    ax.set_ylim(canvas.height, 0)
    ax.set_aspect("equal")
    ax.set_axis_off()
    if background is not None:
        ax.add_patch(
            Rectangle((0, 0), canvas.width, canvas.height, facecolor=background, zorder=-10)
        )


def draw_ground(ax: "Axes", canvas: "CanvasConfig", ground_y: float) -> None:
    """Filled band from the ground line to the bottom of the canvas."""
    ax.add_patch(
        Rectangle(
            (0, ground_y),
            canvas.width,
            canvas.height - ground_y,
            facecolor=COLOR_GROUND,
            edgecolor="none",
            zorder=0,
        )
    )


def draw_ball(
    ax: "Axes",
    position: Sequence[float],
    radius: float,
    color: str = COLOR_BODY,
    alpha: float = 1.0,
) -> Circle:
    circle = Circle(
        (position[0], position[1]),
        radius,
        facecolor=color,
        edgecolor="#222222",
        alpha=alpha,
        zorder=3,
    )
    ax.add_patch(circle)
    return circle


def draw_trail(ax: "Axes", points: Sequence[Sequence[float]], color: str = COLOR_TRAIL) -> None:
    """Polyline through recent positions, fading toward the oldest."""
    if len(points) < 2:
        return
    pts = np.asarray(points, dtype=float)
    n = len(pts)
    for i in range(1, n):
        ax.plot(
            pts[i - 1 : i + 1, 0],
            pts[i - 1 : i + 1, 1],
            color=color,
            alpha=0.15 + 0.6 * i / n,
            linewidth=1.5,
            zorder=2,
        )


def draw_vector(
    ax: "Axes",
    origin: Sequence[float],
    vector: Sequence[float],
    scale: float = 1.0,
    color: str = COLOR_VELOCITY,
    label: str | None = None,
) -> None:
    """Arrow from origin along vector * scale (skipped for zero vectors)."""
    dx, dy = vector[0] * scale, vector[1] * scale
    if np.hypot(dx, dy) < 1e-9:
        return
    end = (origin[0] + dx, origin[1] + dy)
    ax.annotate(
        "",
        xy=end,
        xytext=(origin[0], origin[1]),
        arrowprops={"arrowstyle": "->", "color": color, "linewidth": 2},
        zorder=4,
    )
    if label:
        ax.text(end[0] + 5, end[1] - 5, label, color=color, fontsize=8, zorder=4)


def energy_shares(kinetic: float, potential: float) -> tuple[float, float]:
    """
    Percent of the total energy that is kinetic and potential.

    A non-positive or non-finite total yields (0, 0) instead of dividing.
    """
    total = kinetic + potential
    if not np.isfinite(total) or total <= 0:
        return 0.0, 0.0
    return 100.0 * kinetic / total, 100.0 * potential / total


def draw_energy_bar(
    ax: "Axes",
    x: float,
    y: float,
    width: float,
    kinetic: float,
    potential: float,
    height: float = 16.0,
) -> tuple[float, float]:
    """
    Stacked bar splitting width between kinetic and potential energy.

    Returns:
        (kinetic %, potential %) as drawn
    """
    ke_pct, pe_pct = energy_shares(kinetic, potential)
    ax.add_patch(
        Rectangle((x, y), width, height, facecolor="none", edgecolor=COLOR_TEXT, zorder=5)
    )
    ke_width = width * ke_pct / 100.0
    pe_width = width * pe_pct / 100.0
    if ke_width > 0:
        ax.add_patch(Rectangle((x, y), ke_width, height, facecolor=COLOR_KINETIC, zorder=5))
    if pe_width > 0:
        ax.add_patch(
            Rectangle((x + ke_width, y), pe_width, height, facecolor=COLOR_POTENTIAL, zorder=5)
        )
    ax.text(x, y - 4, f"KE {ke_pct:.0f}%  PE {pe_pct:.0f}%", fontsize=8, color=COLOR_TEXT)
    return ke_pct, pe_pct


def draw_label(ax: "Axes", x: float, y: float, text: str, **kwargs) -> None:
    kwargs.setdefault("fontsize", 9)
    kwargs.setdefault("color", COLOR_TEXT)
    ax.text(x, y, text, zorder=6, **kwargs)
