"""Unit tests for SimulationDriver and the scenario catalog."""

import pytest

from scisim.core.driver import PAUSE_LABEL, START_LABEL, SimulationDriver, paint_error_panel
from scisim.core.parameters import ParameterSpec
from scisim.core.registry import Scenario, ScenarioCatalog
from scisim.core.simulation import Simulation
from scisim.errors import ScenarioNotFoundError, SimulationFailure


class Exploding(Simulation):
    """Raises from step() once running."""

    scenario_id = "exploding"
    title = "爆発"

    @classmethod
    def define_parameters(cls):
        return [ParameterSpec("x", "x", 0, 1, 0.1, 0.5)]

    def initialize_state(self):
        pass

    def step(self, dt):
        raise RuntimeError("boom")

    def draw(self, ax):
        ax.clear()


class Quiet(Exploding):
    scenario_id = "quiet"
    title = "静か"

    def step(self, dt):
        pass


class BrokenConstructor(Quiet):
    scenario_id = "broken"
    title = "壊れた"

    def initialize_state(self):
        raise ValueError("cannot build")


def make_catalog():
    return ScenarioCatalog(
        [Scenario(cls.scenario_id, cls.title, cls) for cls in (Quiet, Exploding, BrokenConstructor)]
    )


class TestScenarioCatalog:
    """Tests for ScenarioCatalog."""

    def test_ids_and_titles_in_order(self):
        catalog = make_catalog()
        assert catalog.ids == ["quiet", "exploding", "broken"]
        assert catalog.titles == ["静か", "爆発", "壊れた"]
        assert len(catalog) == 3

    def test_unknown_id(self):
        with pytest.raises(ScenarioNotFoundError, match="nope"):
            make_catalog().get("nope")

    def test_not_found_is_a_key_error(self):
        with pytest.raises(KeyError):
            make_catalog().get("nope")

    def test_duplicate_registration(self):
        catalog = make_catalog()
        with pytest.raises(ValueError, match="already registered"):
            catalog.register(Scenario("quiet", "again", Quiet))

    def test_default_catalog(self, catalog):
        assert len(catalog) == 9
        assert catalog.ids[0] == "freefall"
        assert [s.id for s in catalog.in_group("waves")] == [
            "single_wave",
            "wave_interference",
            "wave_reflection",
            "wave_diffraction",
        ]
        assert len(catalog.in_group("motion")) == 5


class TestSimulationDriver:
    """Tests for SimulationDriver."""

    def test_tick_without_selection(self):
        driver = SimulationDriver(make_catalog())
        assert driver.tick() is False
        assert driver.start_label == START_LABEL
        assert driver.parameter_specs == []

    def test_select_creates_fresh_instance(self):
        driver = SimulationDriver(make_catalog())
        first = driver.select("quiet")
        second = driver.select("quiet")
        assert first is not second
        assert driver.simulation is second

    def test_select_unknown_raises(self):
        driver = SimulationDriver(make_catalog())
        with pytest.raises(ScenarioNotFoundError):
            driver.select("missing")

    def test_labels_follow_running_state(self):
        driver = SimulationDriver(make_catalog())
        driver.select("quiet")
        assert driver.toggle_running() == PAUSE_LABEL
        assert driver.toggle_running() == START_LABEL

    def test_run_counts_frames(self):
        driver = SimulationDriver(make_catalog())
        sim = driver.select("quiet")
        sim.start()
        assert driver.run(12) == 12
        assert driver.active.frames == 12
        assert sim.time > 0

    def test_failing_frame_paints_error_panel(self, ax):
        failures = []
        driver = SimulationDriver(make_catalog(), ax=ax)
        driver.add_failure_listener(failures.append)
        driver.select("exploding").start()

        assert driver.tick() is False
        assert driver.failed
        assert isinstance(driver.failure, SimulationFailure)
        assert isinstance(driver.failure.cause, RuntimeError)
        assert failures == [driver.failure]
        assert any("boom" in text.get_text() for text in ax.texts)

        # Stays failed until another selection
        assert driver.tick() is False

    def test_select_clears_failure(self, ax):
        driver = SimulationDriver(make_catalog(), ax=ax)
        driver.select("exploding").start()
        driver.tick()
        driver.select("quiet")
        assert not driver.failed
        assert driver.tick() is True

    def test_constructor_failure(self):
        driver = SimulationDriver(make_catalog())
        assert driver.select("broken") is None
        assert driver.failed
        assert driver.failure.scenario_id == "broken"
        assert driver.simulation is None

    def test_controls_ignored_when_failed(self):
        driver = SimulationDriver(make_catalog())
        sim = driver.select("exploding")
        sim.start()
        driver.tick()
        driver.set_parameter("x", 0.9)
        driver.reset()
        assert sim.parameters["x"] == 0.5

    def test_readout_listener(self):
        published = []
        driver = SimulationDriver(make_catalog())
        driver.add_readout_listener(published.append)
        sim = driver.select("quiet")
        sim.start()
        driver.tick()
        assert len(published) == 2
        assert published[-1][0].key == "time"

    def test_set_parameter_and_reset(self):
        driver = SimulationDriver(make_catalog())
        sim = driver.select("quiet")
        driver.set_parameter("x", 0.8)
        assert sim.parameters["x"] == 0.8
        driver.reset()
        assert sim.parameters["x"] == 0.5

    def test_switch_cancels_pending_effects(self):
        driver = SimulationDriver(make_catalog())
        driver.select("quiet")
        fired = []
        driver.animator.call_later(1.0, lambda: fired.append(True))
        driver.select("quiet")
        assert driver.animator.pending == 0
        driver.simulation.start()
        driver.run(100)
        assert fired == []

    def test_paint_error_panel(self, ax):
        paint_error_panel(ax, "message text")
        assert any("message text" in text.get_text() for text in ax.texts)


class TestBuiltinScenarios:
    """Every built-in scenario runs and draws a few frames."""

    def test_all_scenarios_run(self, catalog, ax, small_canvas):
        driver = SimulationDriver(catalog, small_canvas, ax)
        for scenario_id in catalog.ids:
            sim = driver.select(scenario_id)
            assert sim is not None, scenario_id
            sim.start()
            assert driver.run(3) == 3, scenario_id
            assert not driver.failed, scenario_id
            assert sim.data_to_display()[0].key == "time"
