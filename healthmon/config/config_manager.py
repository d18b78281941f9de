"""Configuration loading from YAML."""
import os
from typing import Optional

import yaml

from ..core.errors import ConfigError
from .monitoring_config import MonitoringConfig

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "default_config.yaml")


class ConfigManager:
    """Configuration loading and management."""

    @staticmethod
    def load_config(config_path: Optional[str] = None) -> MonitoringConfig:
        """Load the monitoring section of a YAML file over the defaults."""
        if config_path is None or not os.path.exists(config_path):
            return MonitoringConfig()

        try:
            with open(config_path, "r") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Cannot parse {config_path}: {e}") from e

        if config_data is None:
            return MonitoringConfig()
        if not isinstance(config_data, dict):
            raise ConfigError(f"{config_path} must contain a mapping")

        monitoring = config_data.get("monitoring") or {}
        if not isinstance(monitoring, dict):
            raise ConfigError("'monitoring' section must be a mapping")

        return MonitoringConfig().merged(monitoring)
