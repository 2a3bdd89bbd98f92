#!/usr/bin/env python3
"""
Demo: Interference and Diffraction Patterns

Renders snapshots of three wave scenarios headless:

1. Two coherent sources on a ring (interference fringes)
2. A double slit, where each opening re-emits as a row of secondary sources
3. The standing wave formed by reflection at a fixed end

Output: output/demo_interference/patterns.png
"""

import matplotlib.pyplot as plt

from scisim.core.simulation import CanvasConfig
from scisim.viz import plot_profile, plot_wave_grid, save_figure
from scisim.waves import WaveDiffractionSimulation, WaveInterferenceSimulation, WaveReflectionSimulation
from scisim.waves.diffraction import DOUBLE_SLIT


def run(sim, frames):
    sim.start()
    for _ in range(frames):
        sim.update()
    return sim


def main():
    print("=" * 60)
    print("  WAVE PATTERN DEMONSTRATION")
    print("=" * 60)

    canvas = CanvasConfig(600, 450)

    print("\n1. Two-source interference...")
    interference = run(WaveInterferenceSimulation(canvas), 60)
    for i, j, distance in interference.source_distances():
        print(f"   S{i}-S{j}: {distance:.0f} px = {distance / interference.parameters['wavelength']:.2f} λ")

    print("\n2. Double slit diffraction...")
    diffraction = WaveDiffractionSimulation(canvas)
    diffraction.set_parameter("obstacle_type", DOUBLE_SLIT)
    diffraction.set_parameter("slit_width", 30)
    run(diffraction, 60)
    print(f"   Openings: {diffraction.openings}")
    print(f"   Main diffraction angle: {diffraction.diffraction_angle():.1f}°")
    print(f"   Rayleigh angle: {diffraction.rayleigh_angle():.1f}°")

    print("\n3. Standing wave at a fixed end...")
    reflection = run(WaveReflectionSimulation(canvas), 40)
    nodes, antinodes = reflection.node_positions()
    print(f"   {len(nodes)} nodes, first at x = {nodes[0]:.0f} px (the boundary)")
    print(f"   Fundamental frequency: {reflection.fundamental_frequency():.3f} Hz")

    print("\n4. Creating visualization...")
    fig, axes = plt.subplots(1, 3, figsize=(18, 5))
    plot_wave_grid(interference.grid, title="波の干渉", ax=axes[0], colorbar=False)
    plot_wave_grid(diffraction.grid, title="二重スリット", ax=axes[1], colorbar=False)
    axes[1].axvline(diffraction.barrier_x, color="black", linewidth=1, alpha=0.5)
    plot_profile(
        reflection.xs,
        {"合成波": reflection.total, "定在波": reflection.standing},
        title="固定端での反射",
        ax=axes[2],
    )

    fig.suptitle("Wave Patterns", fontsize=14, fontweight="bold")
    fig.tight_layout()
    save_figure(fig, "output/demo_interference/patterns.png")
    plt.close(fig)
    print("\n   Saved: output/demo_interference/patterns.png")

    print("\n" + "=" * 60)
    print("  Wave pattern demonstration complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
