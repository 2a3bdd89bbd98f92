"""Unit tests for the analysis helpers."""

import numpy as np
import pytest

from scisim.analysis.comparison import compare, exact_pendulum_period, measure_period
from scisim.analysis.energy import EnergyTrace, fit_line, record_energy, record_series
from scisim.motion.freefall import FreeFallSimulation
from scisim.motion.pendulum import PendulumSimulation, small_angle_period
from scisim.waves.single_wave import SingleWaveSimulation


class TestComparison:
    """Tests for ComparisonResult and the period helpers."""

    def test_relative_error(self):
        result = compare("g", 9.6, 9.8)
        assert np.isclose(result.absolute_error, 0.2)
        assert np.isclose(result.relative_error, 0.2 / 9.8)
        assert result.agrees(0.05)
        assert not result.agrees(0.01)

    def test_zero_theory(self):
        assert compare("x", 0.0, 0.0).relative_error == 0.0
        assert compare("x", 1.0, 0.0).relative_error == float("inf")

    def test_exact_period_small_amplitude(self):
        exact = exact_pendulum_period(1.0, 9.8, 1.0)
        assert np.isclose(exact, small_angle_period(1.0, 9.8), rtol=1e-4)

    def test_exact_period_grows_with_amplitude(self):
        assert exact_pendulum_period(1.0, 9.8, 60) > exact_pendulum_period(1.0, 9.8, 30)
        assert exact_pendulum_period(1.0, 9.8, 30) > small_angle_period(1.0, 9.8)

    def test_exact_period_invalid(self):
        with pytest.raises(ValueError):
            exact_pendulum_period(0.0, 9.8, 10)

    def test_measure_period_of_sine(self):
        times = np.linspace(0, 10, 2001)
        signal = np.sin(2 * np.pi * times / 2.5)
        assert np.isclose(measure_period(times, signal), 2.5, rtol=1e-3)

    def test_measure_period_needs_two_peaks(self):
        times = np.linspace(0, 1, 100)
        with pytest.raises(ValueError, match="two maxima"):
            measure_period(times, times)


class TestRecording:
    """Tests for headless recording."""

    def test_record_series_includes_start(self):
        sim = FreeFallSimulation()
        times, speeds = record_series(sim, 50, lambda s: s.velocity[1])
        assert len(times) == 51
        assert times[0] == 0.0
        assert speeds[0] == 0.0

    def test_record_series_stops_with_simulation(self):
        sim = FreeFallSimulation()
        sim.set_parameter("initial_height", 50)
        times, _ = record_series(sim, 10000, lambda s: s.height)
        assert len(times) < 10001
        assert not sim.is_running

    def test_fit_line_recovers_gravity(self):
        sim = FreeFallSimulation()
        times, speeds = record_series(sim, 100, lambda s: s.velocity[1])
        fit = fit_line(times, speeds)
        assert np.isclose(fit.slope, 9.8)
        assert fit.r_squared > 0.999

    def test_record_energy(self):
        trace = record_energy(PendulumSimulation(), 200)
        assert len(trace.times) == 201
        assert np.allclose(trace.total, trace.kinetic + trace.potential)
        assert trace.relative_drift() < 0.01

    def test_record_energy_requires_mechanics(self):
        with pytest.raises(ValueError, match="mechanical energy"):
            record_energy(SingleWaveSimulation(), 10)

    def test_pendulum_period_from_trace(self):
        sim = PendulumSimulation()
        sim.set_parameter("length", 50)
        sim.set_parameter("gravity", 20)
        sim.set_parameter("initial_angle", 5)
        times, angles = record_series(sim, 2000, lambda s: s.angle)
        assert np.isclose(measure_period(times, angles), small_angle_period(50, 20), rtol=0.02)

    def test_drift_of_flat_trace(self):
        trace = EnergyTrace(np.arange(3.0), np.zeros(3), np.zeros(3))
        assert trace.relative_drift() == 0.0
