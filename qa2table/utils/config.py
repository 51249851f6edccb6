"""Configuration loader for qa2table."""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any, Dict

import yaml

from .logging import get_logger

logger = get_logger(__name__)

CONFIG_ENV_VAR = "QA2TABLE_CONFIG"


class Config:
    """Configuration manager for qa2table."""

    def __init__(self, config_dict: Dict[str, Any] | None = None):
        """Initialize configuration.

        Args:
            config_dict: Configuration dictionary. If None, uses defaults.
        """
        self._config = config_dict or self._get_default_config()

    @staticmethod
    def _get_default_config() -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "llm": {
                "provider": "openai",
                "model": "gpt-4-1106-preview",
                "max_tokens": 4000,
            },
            "pipeline": {
                "system_prompt": None,
                "flush_trailing": False,
            },
            "input": {
                "format": "text",
                "path": "test.txt",
            },
            "airtable": {
                "token_name": "github",
                "base_id": "appmhvMGsMRPmuUWJ",
                "table_name": "mention",
                "api_url": "https://api.airtable.com/v0",
                "timeout": 10.0,
            },
            "logging": {
                "file": {"path": "./logs/qa2table.log"},
            },
        }

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> Config:
        """Load configuration from YAML file, merged over the defaults.

        Example:
            >>> config = Config.from_yaml("config.yml")
            >>> config.get("airtable.table_name")
            'mention'
        """
        yaml_path = Path(yaml_path)

        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        logger.info(f"Loading config from {yaml_path}")

        with open(yaml_path, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f)

        merged_config = cls._merge_configs(
            cls._get_default_config(), config_dict or {}
        )
        return cls(merged_config)

    @staticmethod
    def _merge_configs(
        base: Dict[str, Any], override: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Recursively merge two configuration dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = Config._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Supports dot notation for nested keys.

        Example:
            >>> config.get("llm.max_tokens")
            4000
        """
        value = self._config

        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value by key (dot notation supported)."""
        keys = key.split(".")
        config = self._config

        for k in keys[:-1]:
            if not isinstance(config.get(k), dict):
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def to_dict(self) -> Dict[str, Any]:
        """Return a deep copy of the configuration dictionary."""
        return copy.deepcopy(self._config)

    def __repr__(self) -> str:
        return f"Config({self._config})"


# Global config instance
_global_config: Config | None = None


def get_config() -> Config:
    """Get global configuration instance.

    On first use the file named by ``QA2TABLE_CONFIG`` is loaded when set,
    then ``./config.yml`` when present; otherwise the built-in defaults apply.
    """
    global _global_config
    if _global_config is None:
        env_path = os.getenv(CONFIG_ENV_VAR)
        if env_path:
            _global_config = Config.from_yaml(env_path)
        elif Path("config.yml").exists():
            _global_config = Config.from_yaml("config.yml")
        else:
            _global_config = Config()
    return _global_config


def set_config(config: Config | None) -> None:
    """Set (or reset with None) the global configuration instance."""
    global _global_config
    _global_config = config


def load_config(yaml_path: str | Path) -> Config:
    """Load configuration from YAML and set as global."""
    config = Config.from_yaml(yaml_path)
    set_config(config)
    return config
