"""Unit tests for ParameterSpec and ParameterSet."""

import pytest

from scisim.core.parameters import ParameterSet, ParameterSpec


def make_specs():
    return [
        ParameterSpec("gravity", "重力加速度", 1, 20, 0.1, 9.8, "m/s²"),
        ParameterSpec("count", "個数", 2, 10, 1, 5, "個"),
    ]


class TestParameterSpec:
    """Tests for ParameterSpec."""

    def test_clamp(self):
        spec = make_specs()[0]
        assert spec.clamp(50) == 20
        assert spec.clamp(-3) == 1
        assert spec.clamp(4.2) == 4.2

    def test_snap_to_step_grid(self):
        spec = make_specs()[0]
        assert spec.snap(9.83) == pytest.approx(9.8)
        assert spec.snap(9.87) == pytest.approx(9.9)
        assert spec.snap(0.3) == 1

    def test_snap_integer_step(self):
        spec = make_specs()[1]
        assert spec.snap(6.6) == 7
        assert spec.snap(100) == 10

    def test_format_with_unit(self):
        spec = make_specs()[0]
        assert spec.format(9.8) == "9.8 m/s²"

    def test_format_without_unit(self):
        spec = ParameterSpec("e", "反発係数", 0, 1, 0.01, 0.9)
        assert spec.format(0.9) == "0.9"

    def test_min_above_max_rejected(self):
        with pytest.raises(ValueError, match="exceeds max"):
            ParameterSpec("x", "x", 10, 1, 1, 5)

    def test_default_out_of_range_rejected(self):
        with pytest.raises(ValueError, match="outside"):
            ParameterSpec("x", "x", 0, 1, 0.1, 2)

    def test_non_positive_step_rejected(self):
        with pytest.raises(ValueError, match="step"):
            ParameterSpec("x", "x", 0, 1, 0, 0.5)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_rejected(self, value):
        spec = make_specs()[0]
        with pytest.raises(ValueError, match="finite"):
            spec.clamp(value)
        with pytest.raises(ValueError, match="finite"):
            spec.snap(value)


class TestParameterSet:
    """Tests for ParameterSet."""

    def test_starts_at_defaults(self):
        params = ParameterSet(make_specs())
        assert params["gravity"] == 9.8
        assert params["count"] == 5

    def test_set_returns_stored_value(self):
        params = ParameterSet(make_specs())
        assert params.set("gravity", 3.5) == 3.5
        assert params["gravity"] == 3.5

    def test_set_clamps(self):
        params = ParameterSet(make_specs())
        assert params.set("gravity", 100) == 20
        assert params.set("count", 0) == 2

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_keeps_previous_value(self, value):
        params = ParameterSet(make_specs())
        params.set("gravity", 3.0)
        with pytest.raises(ValueError):
            params.set("gravity", value)
        assert params["gravity"] == 3.0

    def test_unknown_id_raises(self):
        params = ParameterSet(make_specs())
        with pytest.raises(KeyError):
            params.set("mass", 1.0)

    def test_duplicate_ids_rejected(self):
        spec = make_specs()[0]
        with pytest.raises(ValueError, match="Duplicate"):
            ParameterSet([spec, spec])

    def test_restore_defaults(self):
        params = ParameterSet(make_specs())
        params.set("gravity", 2.0)
        params.set("count", 9)
        params.restore_defaults()
        assert params.as_dict() == {"gravity": 9.8, "count": 5.0}

    def test_iteration_in_declaration_order(self):
        params = ParameterSet(make_specs())
        assert list(params) == ["gravity", "count"]
        assert len(params) == 2
        assert "gravity" in params
        assert "mass" not in params

    def test_as_dict_is_a_copy(self):
        params = ParameterSet(make_specs())
        values = params.as_dict()
        values["gravity"] = 0.0
        assert params["gravity"] == 9.8
