"""Unit tests for point sources, superposition and WaveGrid."""

import numpy as np
import pytest

from scisim.core.field import (
    WAVE_COLORS,
    PointSource,
    WaveGrid,
    attenuation,
    superpose,
    wave_color,
    wave_color_index,
)


class TestAttenuation:
    """Tests for the distance damping factor."""

    def test_unity_at_source(self):
        assert attenuation(0.0, 0.01) == 1.0

    def test_decreases_with_distance(self):
        assert np.isclose(attenuation(100.0, 0.01), 0.5)
        assert attenuation(200.0, 0.01) < attenuation(100.0, 0.01)

    def test_no_damping_when_k_zero(self):
        assert attenuation(1e6, 0.0) == 1.0


class TestPointSource:
    """Tests for PointSource contributions."""

    def test_periodic_in_wavelength(self):
        source = PointSource(x=0, y=0, wavelength=40.0)
        near = source.contribution(np.array([13.0]), np.array([0.0]), 0.3, k=0.0)
        far = source.contribution(np.array([53.0]), np.array([0.0]), 0.3, k=0.0)
        assert np.allclose(near, far)

    def test_periodic_in_time(self):
        source = PointSource(x=0, y=0, frequency=2.0, wavelength=50.0)
        xs, ys = np.array([10.0, 30.0]), np.array([5.0, 7.0])
        assert np.allclose(source.contribution(xs, ys, 0.1, 0.01), source.contribution(xs, ys, 0.6, 0.01))

    def test_amplitude_scales(self):
        xs, ys = np.array([25.0]), np.array([0.0])
        unit = PointSource(x=0, y=0, wavelength=100.0).contribution(xs, ys, 0.0, 0.0)
        half = PointSource(x=0, y=0, wavelength=100.0, amplitude=0.5).contribution(xs, ys, 0.0, 0.0)
        assert np.isclose(unit[0], 1.0)
        assert np.isclose(half[0], 0.5)


class TestSuperpose:
    """Tests for superpose()."""

    def test_constructive_interference(self):
        sources = [
            PointSource(x=0, y=0, amplitude=0.4, wavelength=400.0),
            PointSource(x=200, y=0, amplitude=0.4, wavelength=400.0),
        ]
        value = superpose(np.array([100.0]), np.array([0.0]), sources, 0.0, k=0.0)
        assert np.isclose(value[0], 0.8)

    def test_destructive_interference(self):
        sources = [
            PointSource(x=0, y=0, amplitude=0.4, wavelength=400.0),
            PointSource(x=200, y=0, amplitude=0.4, wavelength=400.0, phase=np.pi),
        ]
        value = superpose(np.array([100.0]), np.array([0.0]), sources, 0.0, k=0.0)
        assert np.isclose(value[0], 0.0, atol=1e-12)

    def test_clipped_to_unit_range(self):
        sources = [PointSource(x=0, y=0, wavelength=400.0) for _ in range(3)]
        value = superpose(np.array([100.0]), np.array([0.0]), sources, 0.0, k=0.0)
        assert value[0] == 1.0

    def test_inactive_sources_skipped(self):
        sources = [PointSource(x=0, y=0, wavelength=400.0, active=False)]
        value = superpose(np.array([100.0]), np.array([0.0]), sources, 0.0, k=0.0)
        assert value[0] == 0.0

    def test_broadcast_shape(self):
        xs, ys = np.meshgrid(np.arange(5.0), np.arange(3.0))
        assert superpose(xs, ys, [PointSource(x=1, y=1)], 0.0).shape == (3, 5)


class TestWaveColors:
    """Tests for the nine-step palette lookup."""

    def test_ends_and_middle(self):
        assert wave_color_index(-1.0) == 0
        assert wave_color_index(0.0) == 4
        assert wave_color_index(1.0) == len(WAVE_COLORS) - 1

    def test_out_of_range_clamped(self):
        assert wave_color_index(-5.0) == 0
        assert wave_color_index(5.0) == 8

    def test_rest_is_white(self):
        assert wave_color(0.0) == "#FFFFFF"


class TestWaveGrid:
    """Tests for WaveGrid."""

    def test_shape_and_cell_centres(self):
        grid = WaveGrid(800, 600, 4)
        assert grid.shape == (150, 200)
        assert grid.xs.shape == (150, 200)
        assert grid.xs[0, 0] == 2.0
        assert grid.ys[1, 0] == 6.0

    def test_extent(self):
        grid = WaveGrid(100, 50, 5)
        assert grid.extent == (0.0, 100.0, 50.0, 0.0)

    def test_invalid_cell_size(self):
        with pytest.raises(ValueError, match="cell_size"):
            WaveGrid(100, 100, 0)

    def test_recompute_stays_in_range(self):
        grid = WaveGrid(200, 100, 5)
        sources = [PointSource(x=50, y=50), PointSource(x=150, y=50)]
        values = grid.recompute(sources, 0.4, 0.0)
        assert values is grid.values
        assert values.min() >= -1.0
        assert values.max() <= 1.0
