"""
Visualization utilities.

- drawing: canvas helpers used by Simulation.draw()
- fields: wave-field heatmaps and profiles
- trajectories: paths and time series from headless runs
- controls, molecule_view, app: the interactive widgets (import directly)
"""

from scisim.viz.fields import (
    WAVE_CMAP,
    plot_field,
    plot_profile,
    plot_wave_grid,
    save_figure,
)

from scisim.viz.trajectories import (
    plot_energy_trace,
    plot_time_series,
    plot_trajectory,
)

__all__ = [
    "WAVE_CMAP",
    "plot_field",
    "plot_profile",
    "plot_wave_grid",
    "save_figure",
    "plot_energy_trace",
    "plot_time_series",
    "plot_trajectory",
]
