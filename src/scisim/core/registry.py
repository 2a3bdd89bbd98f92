"""
Scenario catalog: the enumerated choices behind the scenario selector.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterator

from scisim.errors import ScenarioNotFoundError

if TYPE_CHECKING:
    from scisim.core.simulation import CanvasConfig, Simulation


@dataclass(frozen=True)
class Scenario:
    """A selectable scenario."""

    id: str
    title: str
    factory: Callable[["CanvasConfig"], "Simulation"]
    group: str = ""  # e.g. "motion", "waves"

    def create(self, canvas: "CanvasConfig") -> "Simulation":
        return self.factory(canvas)


class ScenarioCatalog:
    """Ordered id → Scenario mapping."""

    def __init__(self, scenarios: list[Scenario] | None = None):
        self._scenarios: dict[str, Scenario] = {}
        for scenario in scenarios or []:
            self.register(scenario)

    def register(self, scenario: Scenario) -> None:
        if scenario.id in self._scenarios:
            msg = f"Scenario '{scenario.id}' is already registered"
            raise ValueError(msg)
        self._scenarios[scenario.id] = scenario

    def get(self, scenario_id: str) -> Scenario:
        try:
            return self._scenarios[scenario_id]
        except KeyError:
            raise ScenarioNotFoundError(scenario_id, self.ids) from None

    @property
    def ids(self) -> list[str]:
        return list(self._scenarios)

    @property
    def titles(self) -> list[str]:
        return [s.title for s in self._scenarios.values()]

    def in_group(self, group: str) -> list[Scenario]:
        return [s for s in self._scenarios.values() if s.group == group]

    def __contains__(self, scenario_id: object) -> bool:
        return scenario_id in self._scenarios

    def __iter__(self) -> Iterator[Scenario]:
        return iter(self._scenarios.values())

    def __len__(self) -> int:
        return len(self._scenarios)
