"""
Exception types raised by scisim.

Validation problems (bad bounds, bad atomic numbers, malformed config) are
plain ValueError. The classes here mark failures that the host layer
handles specially: unknown scenarios, missing rendering backends and
exceptions escaping a simulation frame.
"""

from __future__ import annotations


class SciSimError(Exception):
    """Base class for scisim errors."""


class ScenarioNotFoundError(SciSimError, KeyError):
    """Raised when a scenario id is not registered in the catalog."""

    def __init__(self, scenario_id: str, known: list[str] | None = None):
        self.scenario_id = scenario_id
        self.known = list(known or [])
        msg = f"Unknown scenario '{scenario_id}'"
        if self.known:
            msg += f" (available: {', '.join(self.known)})"
        super().__init__(msg)

    def __str__(self) -> str:
        return self.args[0]


class RenderBackendError(SciSimError):
    """Raised when a rendering surface cannot be created."""


class SimulationFailure(SciSimError):
    """Wraps an exception raised while advancing or drawing a frame."""

    def __init__(self, scenario_id: str, cause: BaseException):
        self.scenario_id = scenario_id
        self.cause = cause
        super().__init__(f"{scenario_id}: {type(cause).__name__}: {cause}")
