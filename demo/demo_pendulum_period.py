#!/usr/bin/env python3
"""
Demo: Pendulum Period Against Amplitude

Measures the period of the simulated pendulum at several release angles
and compares it with:

1. The small-angle period 2π√(L/g)
2. The first-order amplitude correction shown in the readout
3. The exact period 4√(L/g)·K(sin²(θ0/2))

Output: output/demo_pendulum/period.png
"""

import numpy as np
import matplotlib.pyplot as plt

from scisim.analysis import compare, exact_pendulum_period, measure_period, record_series
from scisim.motion import PendulumSimulation
from scisim.motion.pendulum import corrected_period, small_angle_period
from scisim.viz import save_figure


def main():
    print("=" * 60)
    print("  PENDULUM PERIOD DEMONSTRATION")
    print("=" * 60)

    length = 100.0
    gravity = 9.8
    amplitudes = [5, 10, 20, 30, 45, 60, 80]

    print(f"\n1. Measuring periods (L = {length}, g = {gravity})...")
    measured = []
    for amplitude in amplitudes:
        sim = PendulumSimulation()
        sim.set_parameter("length", length)
        sim.set_parameter("gravity", gravity)
        sim.set_parameter("initial_angle", amplitude)
        times, angles = record_series(sim, 4000, lambda s: s.angle)
        period = measure_period(times, angles)
        exact = exact_pendulum_period(length, gravity, amplitude)
        result = compare(f"{amplitude}°", period, exact)
        measured.append(period)
        print(
            f"   θ0 = {amplitude:2d}°: measured {period:6.3f} s, exact {exact:6.3f} s, "
            f"error {100 * result.relative_error:.2f}%"
        )

    small = small_angle_period(length, gravity)
    print(f"\n   Small-angle period: {small:.3f} s")

    print("\n2. Creating visualization...")
    fine = np.linspace(1, 85, 200)
    fig, ax = plt.subplots(figsize=(9, 6))
    ax.plot(fine, [exact_pendulum_period(length, gravity, a) for a in fine], "k-", label="厳密解 (楕円積分)")
    ax.plot(fine, [corrected_period(length, gravity, a) for a in fine], "b--", label="一次補正")
    ax.axhline(small, color="gray", linestyle=":", label="微小振幅")
    ax.plot(amplitudes, measured, "ro", label="シミュレーション")
    ax.set_xlabel("初期角度 (°)")
    ax.set_ylabel("周期 (秒)")
    ax.set_title("Pendulum Period vs Amplitude", fontsize=14, fontweight="bold")
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)

    save_figure(fig, "output/demo_pendulum/period.png")
    plt.close(fig)
    print("\n   Saved: output/demo_pendulum/period.png")

    print("\n" + "=" * 60)
    print("  Pendulum demonstration complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
