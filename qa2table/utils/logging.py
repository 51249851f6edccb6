"""Logging utilities for qa2table.

Every module logs through ``get_logger(__name__)`` so that records end up under
the ``qa2table`` logger tree, which the setup functions below configure with a
console handler and a rotating file handler.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any

# Default format always includes filename and line number
LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
)

ROOT_LOGGER_NAME = "qa2table"
DEFAULT_LOG_FILE = "./logs/qa2table.log"
DEFAULT_MAX_BYTES = 10485760  # 10MB
DEFAULT_BACKUP_COUNT = 5
NOISY_LOGGERS = ["httpx", "httpcore", "openai", "urllib3"]


def _as_level(level: int | str, fallback: int = logging.INFO) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), fallback)
    if isinstance(level, int):
        return level
    return fallback


def _as_int(value: Any, fallback: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


def _configure_root(level: int, file_handler: logging.Handler) -> logging.Logger:
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()
    root_logger.propagate = False

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)
    return root_logger


def _rotating_handler_from_config(config: Any) -> logging.Handler:
    log_file_path = config.get("logging.file.path", DEFAULT_LOG_FILE)
    if not isinstance(log_file_path, (str, Path)):
        log_file_path = DEFAULT_LOG_FILE
    max_bytes = _as_int(
        config.get("logging.file.max_bytes", DEFAULT_MAX_BYTES), DEFAULT_MAX_BYTES
    )
    backup_count = _as_int(
        config.get("logging.file.backup_count", DEFAULT_BACKUP_COUNT),
        DEFAULT_BACKUP_COUNT,
    )

    log_path = Path(log_file_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    return logging.handlers.RotatingFileHandler(
        log_path, maxBytes=max_bytes, backupCount=backup_count
    )


def setup_logging(
    level: int | str = logging.INFO,
    log_file: str | Path = DEFAULT_LOG_FILE,
) -> None:
    """Set up console and file logging for the package.

    Args:
        level: Logging level (e.g., logging.INFO, "DEBUG")
        log_file: File path to write logs to

    Example:
        >>> setup_logging(level="DEBUG", log_file="qa2table.log")
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    _configure_root(_as_level(level), logging.FileHandler(log_path))


def setup_cli_logging(verbose: int = 0, config: Any = None) -> None:
    """Set up logging for CLI commands.

    The verbose flag picks the level (0=INFO, 1+=DEBUG); file location,
    rotation and third-party levels come from the ``logging`` config section.

    Args:
        verbose: Verbosity level
        config: Config object. If None, loads from default config.
    """
    if config is None:
        from .config import get_config

        config = get_config()

    log_level = logging.DEBUG if _as_int(verbose, 0) > 0 else logging.INFO
    _configure_root(log_level, _rotating_handler_from_config(config))

    third_party_level = _as_level(
        config.get("logging.third_party.level", "WARNING"), logging.WARNING
    )
    third_party_loggers = config.get("logging.third_party.loggers", NOISY_LOGGERS)
    if not isinstance(third_party_loggers, (list, tuple)):
        third_party_loggers = NOISY_LOGGERS
    configure_third_party_loggers(third_party_level, third_party_loggers)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a specific module.

    Args:
        name: Name of the logger (typically __name__)

    Returns:
        Logger placed under the ``qa2table`` tree
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_third_party_loggers(
    level: int = logging.WARNING, loggers: list[str] | tuple[str, ...] | None = None
) -> None:
    """Quiet the HTTP and SDK loggers that would otherwise log every request."""
    for logger_name in loggers or NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(level)
