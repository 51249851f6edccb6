"""Utility functions and helpers for qa2table.

This module provides:
- Configuration loading (YAML + environment overrides)
- Logging configuration and utilities
"""

from __future__ import annotations

from qa2table.utils.config import Config, get_config, load_config, set_config
from qa2table.utils.logging import (
    configure_third_party_loggers,
    get_logger,
    setup_cli_logging,
    setup_logging,
)

__all__ = [
    # Config
    "Config",
    "get_config",
    "load_config",
    "set_config",
    # Logging
    "configure_third_party_loggers",
    "get_logger",
    "setup_cli_logging",
    "setup_logging",
]
