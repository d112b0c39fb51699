"""Logging configuration for Ethereal Post.

Modules log through ``logging.getLogger(__name__)``, so configuring the
``etherealpost`` logger once routes every one of them to the same
handlers.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: int | str | None = None) -> int:
    """Turn a level name or number into a logging level.

    ``None`` reads ``LOG_LEVEL`` from the environment and defaults to INFO.

    Raises:
        ValueError: If the name is not a known level.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def setup_logging(
    level: int | str | None = None,
    module_name: str = "etherealpost",
    log_file: str | Path | None = None,
) -> logging.Logger:
    """Configure and return a logger with consistent formatting.

    Args:
        level: Level name or number (default: ``LOG_LEVEL`` or INFO).
        module_name: Name for the logger instance.
        log_file: Optional file that receives the same records as stdout.

    Returns:
        Configured logger. A logger that already has handlers is
        returned unchanged.

    Raises:
        ValueError: If ``level`` is not a known level name.
    """
    resolved = resolve_level(level)
    logger = logging.getLogger(module_name)

    if logger.handlers:
        return logger

    logger.setLevel(resolved)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(resolved)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
