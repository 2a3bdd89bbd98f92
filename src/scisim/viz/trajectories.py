"""
Headless analysis figures: paths on the canvas and quantities over time.

Points are in canvas pixels (y down), so trajectory axes are flipped to
match what the interactive view shows.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Mapping, Sequence

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes

if TYPE_CHECKING:
    from scisim.analysis.energy import EnergyTrace
    from scisim.core.simulation import CanvasConfig


def plot_trajectory(
    points: Sequence[Sequence[float]] | np.ndarray,
    title: str = "軌跡",
    canvas: "CanvasConfig | None" = None,
    ax: Axes | None = None,
    figsize: tuple[float, float] = (8, 6),
    show_start: bool = True,
    show_end: bool = True,
    line_color: str = "#4682B4",
    line_width: float = 2.0,
) -> tuple[Figure, Axes]:
    """
    Plot a recorded path, e.g. a simulation's trail.

    Args:
        points: Sequence of (x, y) canvas positions
        title: Plot title
        canvas: If given, axes limits match the canvas
        ax: Existing axes (creates new if None)
        figsize: Figure size if creating new figure
        show_start: Mark starting position
        show_end: Mark ending position
        line_color: Trajectory line color
        line_width: Trajectory line width

    Returns:
        (fig, ax) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    path = np.asarray(points, dtype=np.float64).reshape(-1, 2)

    if len(path) > 0:
        ax.plot(path[:, 0], path[:, 1], color=line_color, linewidth=line_width, zorder=2)

        if show_start:
            ax.scatter(
                [path[0, 0]], [path[0, 1]],
                color="green", s=80, marker="o", zorder=3,
                label="開始", edgecolors="white", linewidths=1.5
            )
        if show_end:
            ax.scatter(
                [path[-1, 0]], [path[-1, 1]],
                color="red", s=80, marker="x", zorder=3,
                label="終了", linewidths=2
            )

    if canvas is not None:
        ax.set_xlim(0, canvas.width)
        ax.set_ylim(canvas.height, 0)
    elif not ax.yaxis_inverted():
        ax.invert_yaxis()
    ax.set_aspect("equal")

    ax.set_title(title)
    ax.set_xlabel("x (px)")
    ax.set_ylabel("y (px)")

    if len(path) > 0 and (show_start or show_end):
        ax.legend(loc="upper right")

    return fig, ax


def plot_time_series(
    times: np.ndarray,
    series: Mapping[str, np.ndarray],
    title: str = "",
    ylabel: str = "",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (10, 4),
) -> tuple[Figure, Axes]:
    """
    Plot one or more quantities against simulation time.

    Args:
        times: Sample times in seconds
        series: Label → values, same length as times
        title: Plot title
        ylabel: Y axis label
        ax: Existing axes (creates new if None)
        figsize: Figure size if creating new figure
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    for label, values in series.items():
        ax.plot(times, values, label=label, linewidth=1.5)

    ax.set_title(title)
    ax.set_xlabel("時間 (秒)")
    ax.set_ylabel(ylabel)
    ax.grid(True, alpha=0.3)
    if len(series) > 1:
        ax.legend(loc="upper right")

    return fig, ax


def plot_energy_trace(trace: "EnergyTrace", title: str = "力学的エネルギー", **kwargs) -> tuple[Figure, Axes]:
    """Kinetic, potential and total energy of a recorded run."""
    return plot_time_series(
        trace.times,
        {
            "運動エネルギー": trace.kinetic,
            "位置エネルギー": trace.potential,
            "力学的エネルギー": trace.total,
        },
        title=title,
        ylabel="J",
        **kwargs,
    )
