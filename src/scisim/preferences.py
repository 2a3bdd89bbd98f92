"""
Persisted UI theme preference.

The only state scisim keeps between sessions is one string key, "theme",
stored in a small JSON file. Themes map onto matplotlib style sheets.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

THEME_KEY = "theme"
DEFAULT_THEME = "light"

THEME_STYLES = {
    "light": "default",
    "dark": "dark_background",
}


def style_for(theme: str) -> str:
    """Matplotlib style name for a theme (unknown themes use the default)."""
    return THEME_STYLES.get(theme, THEME_STYLES[DEFAULT_THEME])


def load_theme(path: str | Path) -> str:
    """
    Read the stored theme.

    A missing, unreadable or unrecognized preference falls back to the
    default theme rather than failing the app.
    """
    path = Path(path)
    if not path.exists():
        return DEFAULT_THEME

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable preferences file %s: %s", path, exc)
        return DEFAULT_THEME

    theme = data.get(THEME_KEY) if isinstance(data, dict) else None
    if theme not in THEME_STYLES:
        logger.warning("Ignoring unknown theme %r in %s", theme, path)
        return DEFAULT_THEME
    return theme


def save_theme(path: str | Path, theme: str) -> None:
    """Store the theme, creating parent directories as needed."""
    if theme not in THEME_STYLES:
        msg = f"Unknown theme '{theme}', expected one of {sorted(THEME_STYLES)}"
        raise ValueError(msg)

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({THEME_KEY: theme}), encoding="utf-8")
    logger.debug("Saved theme %s to %s", theme, path)
