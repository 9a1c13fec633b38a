"""Centralized logging configuration for m6a_predict.

The library itself only emits records through module loggers obtained with
:func:`get_logger`; it never installs handlers on import. Applications that
want m6a_predict's messages call :func:`configure_logging` once at startup.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

from .config import DEFAULT_LOG_LEVEL, VALID_LOG_LEVELS

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False
_log_file: Optional[Path] = None
_log_level: int = logging.INFO


def _resolve_level(level: Union[int, str]) -> int:
    """Turn a level name or number into a logging level number.

    Raises:
        ValueError: If a level name is not one of VALID_LOG_LEVELS
    """
    if isinstance(level, int):
        return level
    name = level.upper()
    if name not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level '{level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )
    return getattr(logging, name)


def configure_logging(
    level: Union[int, str] = DEFAULT_LOG_LEVEL,
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_LOG_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    force: bool = False,
) -> None:
    """Configure the root logger.

    Args:
        level: Logging level as int or name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file. If None, logs to STDOUT
        log_format: Format string for log messages
        date_format: Format string for timestamps
        force: If True, reconfigure even if already configured

    Examples:
        >>> configure_logging(level="DEBUG", log_file="predictions.log")
        >>> configure_logging(level=logging.WARNING, force=True)
    """
    global _configured, _log_file, _log_level

    level = _resolve_level(level)

    if _configured and not force:
        return

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(log_format, datefmt=date_format)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, mode="a")
    else:
        handler = logging.StreamHandler(sys.stdout)

    handler.setFormatter(formatter)

    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    _configured = True
    _log_file = Path(log_file) if log_file else None
    _log_level = level


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module (usually called with ``__name__``)."""
    return logging.getLogger(name)


def is_configured() -> bool:
    """Check whether configure_logging() has been called."""
    return _configured


def get_log_file() -> Optional[Path]:
    """Get the current log file path, or None when logging to STDOUT."""
    return _log_file


def get_log_level() -> int:
    """Get the configured logging level."""
    return _log_level


def set_log_level(level: Union[int, str]) -> None:
    """Change the logging level at runtime.

    Args:
        level: New logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    global _log_level

    _log_level = _resolve_level(level)
    logging.getLogger().setLevel(_log_level)
