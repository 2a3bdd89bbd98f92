"""
Heatmaps of sampled wave fields.

Field values live in [-1, 1]; the colormap runs from blue (trough) through
white (rest) to red (crest), matching wave_color() in scisim.core.field.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.colors import LinearSegmentedColormap
from matplotlib.figure import Figure

from scisim.core.field import WAVE_COLORS

if TYPE_CHECKING:
    from scisim.core.field import WaveGrid


def _create_wave_cmap():
    """Colormap through the nine-step wave palette."""
    return LinearSegmentedColormap.from_list("wave", WAVE_COLORS)


WAVE_CMAP = _create_wave_cmap()


def plot_field(
    field: np.ndarray,
    title: str = "",
    cmap=None,
    vmin: float | None = -1.0,
    vmax: float | None = 1.0,
    extent: tuple[float, float, float, float] | None = None,
    ax: Axes | None = None,
    colorbar: bool = True,
    figsize: tuple[float, float] = (8, 6),
) -> tuple[Figure, Axes]:
    """
    Plot a 2D field as a heatmap.

    Row 0 of the array is drawn at the top, as on the canvas.

    Args:
        field: 2D array to plot
        title: Plot title
        cmap: Colormap (the wave colormap if None)
        vmin, vmax: Color scale limits
        extent: Canvas extent (left, right, bottom, top) in pixels
        ax: Existing axes to plot on (creates new figure if None)
        colorbar: Whether to add a colorbar
        figsize: Figure size if creating new figure

    Returns:
        (fig, ax) tuple
    """
    if cmap is None:
        cmap = WAVE_CMAP

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    im = ax.imshow(
        field,
        origin="upper",
        cmap=cmap,
        vmin=vmin,
        vmax=vmax,
        extent=extent,
        aspect="equal",
    )

    if colorbar:
        plt.colorbar(im, ax=ax, fraction=0.046, pad=0.04)

    ax.set_title(title)
    ax.set_xlabel("x (px)")
    ax.set_ylabel("y (px)")

    return fig, ax


def plot_wave_grid(grid: "WaveGrid", title: str = "", ax: Axes | None = None, **kwargs) -> tuple[Figure, Axes]:
    """Plot a WaveGrid in canvas coordinates."""
    return plot_field(grid.values, title=title, extent=grid.extent, ax=ax, **kwargs)


def plot_profile(
    xs: np.ndarray,
    curves: dict[str, np.ndarray],
    title: str = "",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (10, 4),
) -> tuple[Figure, Axes]:
    """
    Plot one or more 1D wave profiles against position.

    Args:
        xs: Sample positions
        curves: Label → values
        title: Plot title
        ax: Existing axes (creates new figure if None)
        figsize: Figure size if creating new figure
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    for label, values in curves.items():
        ax.plot(xs, values, label=label, linewidth=1.5)

    ax.axhline(0, color="gray", linewidth=0.5)
    ax.set_title(title)
    ax.set_xlabel("x (px)")
    ax.set_ylabel("displacement")
    if len(curves) > 1:
        ax.legend(loc="upper right")

    return fig, ax


def save_figure(fig: Figure, path: str | Path, dpi: int = 150) -> None:
    """Save a figure, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
