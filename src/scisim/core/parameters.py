"""
Bounded, user-adjustable simulation parameters.

Each simulation type declares a list of ParameterSpec. The host turns every
spec into a slider; the simulation keeps the current values in a
ParameterSet, which is the only place parameter values live.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterator, Sequence


@dataclass(frozen=True)
class ParameterSpec:
    """Declaration of one slider-backed parameter."""

    id: str  # Key used by set_parameter
    display_name: str  # Slider label
    min: float
    max: float
    step: float  # Slider granularity
    default: float
    unit: str = ""

    def __post_init__(self):
        if self.min > self.max:
            msg = f"Parameter '{self.id}': min {self.min} exceeds max {self.max}"
            raise ValueError(msg)
        if not self.min <= self.default <= self.max:
            msg = f"Parameter '{self.id}': default {self.default} outside [{self.min}, {self.max}]"
            raise ValueError(msg)
        if self.step <= 0:
            msg = f"Parameter '{self.id}': step must be positive, got {self.step}"
            raise ValueError(msg)

    def _finite(self, value: float) -> float:
        value = float(value)
        if not math.isfinite(value):
            msg = f"Parameter '{self.id}': value must be finite, got {value}"
            raise ValueError(msg)
        return value

    def clamp(self, value: float) -> float:
        """
        Limit value to [min, max].

        Raises:
            ValueError: If value is NaN or infinite
        """
        return min(max(self._finite(value), self.min), self.max)

    def snap(self, value: float) -> float:
        """Round value onto the step grid anchored at the default, then clamp."""
        steps = round((self._finite(value) - self.default) / self.step)
        snapped = self.default + steps * self.step
        # Trim float noise such as 0.30000000000000004
        decimals = max(0, -int(f"{self.step:e}".split("e")[1])) + 2
        return self.clamp(round(snapped, decimals))

    def format(self, value: float) -> str:
        """Readout text shown next to a slider."""
        text = f"{value:g}"
        return f"{text} {self.unit}" if self.unit else text


class ParameterSet:
    """
    Current values for a fixed list of parameter specs.

    Values are always within their declared bounds. Iteration yields the
    ids in declaration order.
    """

    def __init__(self, specs: Sequence[ParameterSpec]):
        self._specs: dict[str, ParameterSpec] = {}
        for spec in specs:
            if spec.id in self._specs:
                msg = f"Duplicate parameter id '{spec.id}'"
                raise ValueError(msg)
            self._specs[spec.id] = spec
        self._values: dict[str, float] = {}
        self.restore_defaults()

    @property
    def specs(self) -> list[ParameterSpec]:
        """Declared specs in order."""
        return list(self._specs.values())

    def spec(self, param_id: str) -> ParameterSpec:
        return self._specs[param_id]

    def restore_defaults(self) -> None:
        """Set every value back to its declared default."""
        self._values = {pid: float(s.default) for pid, s in self._specs.items()}

    def set(self, param_id: str, value: float) -> float:
        """
        Store a value for a declared parameter.

        Args:
            param_id: Declared parameter id
            value: New value, clamped to the declared bounds

        Returns:
            The stored value

        Raises:
            KeyError: If param_id is not declared
            ValueError: If value is NaN or infinite
        """
        spec = self._specs[param_id]
        stored = spec.clamp(value)
        self._values[param_id] = stored
        return stored

    def as_dict(self) -> dict[str, float]:
        return dict(self._values)

    def __getitem__(self, param_id: str) -> float:
        return self._values[param_id]

    def __contains__(self, param_id: object) -> bool:
        return param_id in self._specs

    def __iter__(self) -> Iterator[str]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def __repr__(self) -> str:
        items = ", ".join(f"{k}={v:g}" for k, v in self._values.items())
        return f"ParameterSet({items})"
