"""
Configuration loading for SQLite Dumper.
"""

import os
import re
from typing import Any

import yaml


class ConfigLoader:
    """Loads configuration from a YAML file."""

    ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')

    def __init__(self, config_path: str):
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        with open(self.config_path, 'r') as f:
            config = yaml.safe_load(f) or {}

        if not isinstance(config, dict):
            raise ValueError(f"Configuration file '{self.config_path}' must contain a mapping")
        return self._resolve_env_vars(config)

    def _resolve_env_vars(self, obj: Any) -> Any:
        """Recursively resolve environment variables in config."""
        if isinstance(obj, str):
            matches = self.ENV_VAR_PATTERN.findall(obj)
            for match in matches:
                env_value = os.environ.get(match, '')
                obj = obj.replace(f'${{{match}}}', env_value)
            return obj
        elif isinstance(obj, dict):
            return {k: self._resolve_env_vars(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._resolve_env_vars(item) for item in obj]
        return obj

    def get_dump_settings(self) -> dict[str, Any]:
        """Get dump settings (migration, drop_if_exists, ...)."""
        settings = self.config.get('dump') or {}
        return {k: self._parse_bool(v) for k, v in settings.items()}

    def get_logging_settings(self) -> dict[str, Any]:
        """Get logging settings."""
        return dict(self.config.get('logging') or {})

    @staticmethod
    def _parse_bool(value: Any) -> Any:
        # ${VAR} substitution always yields strings
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in ('1', 'true', 'yes', 'on'):
                return True
            if lowered in ('', '0', 'false', 'no', 'off'):
                return False
        return value
