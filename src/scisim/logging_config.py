"""
Logging configuration for scisim.

One call to setup_logging() at program start wires a console handler and,
optionally, a rotating log file. Library modules only ever call
logging.getLogger(__name__).
"""

from __future__ import annotations
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LEVEL = "INFO"
MAX_BYTES = 10 * 1024 * 1024  # 10MB
BACKUP_COUNT = 5


def setup_logging(
    name: str = "scisim",
    level: str | int | None = None,
    log_file: str | Path | None = None,
) -> logging.Logger:
    """
    Configure and return the named logger.

    Args:
        name: Logger name (the package logger by default)
        level: Level name or number; falls back to SCISIM_LOG_LEVEL, then INFO
        log_file: Optional path for a rotating file handler

    Returns:
        The configured logger
    """
    if level is None:
        level = os.getenv("SCISIM_LOG_LEVEL", DEFAULT_LEVEL)
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger(name)
    logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT)

    # Repeated calls must not stack handlers
    if not any(getattr(h, "_scisim_console", False) for h in logger.handlers):
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        console._scisim_console = True
        logger.addHandler(console)

    if log_file is not None:
        path = Path(log_file)
        existing = {
            getattr(h, "baseFilename", None)
            for h in logger.handlers
            if isinstance(h, RotatingFileHandler)
        }
        if os.path.abspath(path) not in existing:
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8"
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
