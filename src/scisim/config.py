"""
Application configuration.

Defaults live on the AppConfig dataclass; AppConfig.from_env() overlays
SCISIM_* environment variables on top of them.
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

ENV_PREFIX = "SCISIM_"


def _default_preferences_path() -> Path:
    return Path.home() / ".scisim" / "preferences.json"


@dataclass
class AppConfig:
    """Settings for the interactive app and CLI."""

    canvas_width: int = 800  # Drawing surface width (px)
    canvas_height: int = 600  # Drawing surface height (px)
    fps: int = 60  # Host loop rate (frames per second)
    log_level: str = "INFO"
    log_file: Path | None = None  # Rotating log file, console only if None
    preferences_path: Path = field(default_factory=_default_preferences_path)
    default_scenario: str = "freefall"

    def __post_init__(self):
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            msg = f"Canvas size must be positive, got {self.canvas_width}x{self.canvas_height}"
            raise ValueError(msg)
        if self.fps <= 0:
            msg = f"fps must be positive, got {self.fps}"
            raise ValueError(msg)

    @property
    def frame_interval_ms(self) -> float:
        """Delay between host frames in milliseconds."""
        return 1000.0 / self.fps

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AppConfig":
        """
        Build a config from SCISIM_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ (for tests)

        Returns:
            AppConfig with every variable that is set applied
        """
        env = os.environ if environ is None else environ
        overrides: dict = {}

        for name, attr in (
            ("CANVAS_WIDTH", "canvas_width"),
            ("CANVAS_HEIGHT", "canvas_height"),
            ("FPS", "fps"),
        ):
            raw = env.get(ENV_PREFIX + name)
            if raw is not None:
                overrides[attr] = _parse_int(ENV_PREFIX + name, raw)

        log_level = env.get(ENV_PREFIX + "LOG_LEVEL")
        if log_level:
            overrides["log_level"] = log_level.upper()

        log_file = env.get(ENV_PREFIX + "LOG_FILE")
        if log_file:
            overrides["log_file"] = Path(log_file).expanduser()

        preferences = env.get(ENV_PREFIX + "PREFERENCES")
        if preferences:
            overrides["preferences_path"] = Path(preferences).expanduser()

        scenario = env.get(ENV_PREFIX + "SCENARIO")
        if scenario:
            overrides["default_scenario"] = scenario

        return cls(**overrides)


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        msg = f"{name} must be an integer, got {raw!r}"
        raise ValueError(msg) from None
