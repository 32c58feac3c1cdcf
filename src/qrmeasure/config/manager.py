"""Configuration manager for QRMeasure.

Handles loading, saving, and accessing configuration values. Configuration
is stored as a JSON file of named groups; values found on disk are merged
over DEFAULT_CONFIG so new settings always have a value.
"""

import copy
import json
from pathlib import Path
from typing import Any

from loguru import logger
from platformdirs import user_config_dir

from qrmeasure.config.defaults import DEFAULT_CONFIG


class ConfigManager:
    """Grouped application settings backed by a JSON file."""

    CONFIG_FILENAME = "qrmeasure_config.json"

    def __init__(self, config_dir: str | Path | None = None):
        if config_dir is None:
            config_dir = user_config_dir("QRMeasure", "QRMeasure")
        self._config_dir = Path(config_dir)
        self._config_path = self._config_dir / self.CONFIG_FILENAME
        self._data: dict[str, dict[str, Any]] = copy.deepcopy(DEFAULT_CONFIG)

    @property
    def config_path(self) -> Path:
        return self._config_path

    def load(self):
        """Load configuration from disk, merging with defaults."""
        self._data = copy.deepcopy(DEFAULT_CONFIG)

        if not self._config_path.exists():
            logger.info("No config file found, using defaults.")
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                user_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load config, using defaults: {e}")
            return

        if not isinstance(user_data, dict):
            logger.warning(f"Ignoring config file {self._config_path}: not a JSON object")
            return

        for group, values in user_data.items():
            if not isinstance(values, dict):
                logger.warning(f"Ignoring config group '{group}': not a JSON object")
                continue
            self._data.setdefault(group, {}).update(values)

        logger.info(f"Configuration loaded from {self._config_path}")

    def save(self):
        """Save current configuration to disk."""
        self._config_dir.mkdir(parents=True, exist_ok=True)

        with open(self._config_path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2)

        logger.info(f"Configuration saved to {self._config_path}")

    def get(self, group: str, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        return self._data.get(group, {}).get(key, default)

    def set(self, group: str, key: str, value: Any):
        """Set a configuration value."""
        self._data.setdefault(group, {})[key] = value
