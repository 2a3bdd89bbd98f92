#!/usr/bin/env python3
"""
Demo: Free Fall With and Without Air Drag

Drops the same ball twice and compares the runs:

1. Without drag the speed grows linearly; a line fit recovers g
2. With quadratic drag the speed levels off toward √(m·g/k)
3. Mechanical energy is conserved only in the drag-free run

Output: output/demo_free_fall/free_fall.png
"""

import numpy as np
import matplotlib.pyplot as plt

from scisim.analysis import fit_line, record_energy, record_series
from scisim.motion import FreeFallSimulation
from scisim.viz import plot_time_series, save_figure


def main():
    print("=" * 60)
    print("  FREE FALL DEMONSTRATION")
    print("=" * 60)

    gravity = 9.8
    drag = 0.05
    mass = 1.0

    # Drag-free run
    print("\n1. Dropping without air drag...")
    sim = FreeFallSimulation()
    times, speeds = record_series(sim, 1000, lambda s: s.velocity[1])
    fit = fit_line(times, speeds)
    print(f"   Landed after {sim.time:.2f} s at {speeds.max():.2f} m/s")
    print(f"   Fitted slope: {fit.slope:.3f} m/s² (set: {gravity}), R² = {fit.r_squared:.5f}")

    sim.reset()
    trace = record_energy(sim, 300)
    print(f"   Energy drift over 300 frames: {100 * trace.relative_drift():.3f}%")

    # Run with drag
    print("\n2. Dropping with air drag k = {:.2f}...".format(drag))
    drag_sim = FreeFallSimulation()
    drag_sim.set_parameter("air_resistance", drag)
    drag_times, drag_speeds = record_series(drag_sim, 1000, lambda s: s.velocity[1])
    terminal = np.sqrt(mass * gravity / drag)
    print(f"   Landed after {drag_sim.time:.2f} s at {drag_speeds.max():.2f} m/s")
    print(f"   Terminal speed √(m·g/k) = {terminal:.2f} m/s")

    # Plot
    print("\n3. Creating visualization...")
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    plot_time_series(
        times,
        {"空気抵抗なし": speeds},
        title="速度",
        ylabel="m/s",
        ax=axes[0],
    )
    axes[0].plot(drag_times, drag_speeds, label=f"k = {drag}")
    axes[0].plot(times, fit.slope * times + fit.intercept, "k--", linewidth=1, label=f"fit: {fit.slope:.2f}·t")
    axes[0].axhline(terminal, color="gray", linestyle=":", label="終端速度")
    axes[0].legend(loc="upper left")

    plot_time_series(
        trace.times,
        {
            "運動エネルギー": trace.kinetic,
            "位置エネルギー": trace.potential,
            "力学的エネルギー": trace.total,
        },
        title="力学的エネルギー (空気抵抗なし)",
        ylabel="J",
        ax=axes[1],
    )

    fig.suptitle("Free Fall", fontsize=14, fontweight="bold")
    fig.tight_layout()
    save_figure(fig, "output/demo_free_fall/free_fall.png")
    plt.close(fig)
    print("\n   Saved: output/demo_free_fall/free_fall.png")

    print("\n" + "=" * 60)
    print("  Free fall demonstration complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
