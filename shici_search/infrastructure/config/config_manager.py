"""
Configuration manager for centralized configuration handling.

This module provides a manager for loading and managing application
configurations, with support for different environments.
"""

from typing import Dict, Any, Optional
import logging
import os
import yaml
from pathlib import Path

from .config_validator import ConfigValidator
from .environment_config import EnvironmentConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Manager for application configurations.

    Loads base.yaml, overlays {environment}.yaml when present, applies
    environment variable overrides and validates the result.
    """

    def __init__(
        self,
        config_dir: Optional[str] = None,
        environment: Optional[str] = None
    ):
        """
        Initialize the manager.

        Args:
            config_dir: Configuration directory path
            environment: Optional environment name
        """
        self.config_dir = Path(config_dir or os.getenv("SHICI_SEARCH_CONFIG_DIR", "config"))
        self.environment = environment or os.getenv("APP_ENV", "development")
        self.validator = ConfigValidator()
        self._config: Optional[EnvironmentConfig] = None

    def load_config(self) -> EnvironmentConfig:
        """
        Load configuration from files.

        Returns:
            EnvironmentConfig: Loaded configuration

        Raises:
            FileNotFoundError: If base.yaml is not found
            ValueError: If configuration is invalid
        """
        if self._config is not None:
            return self._config

        base_config = self._load_yaml("base.yaml")

        env_path = self.config_dir / f"{self.environment}.yaml"
        if env_path.exists():
            env_config = self._load_yaml(env_path.name)
        else:
            logger.info(f"No configuration file for environment '{self.environment}'")
            env_config = {}

        config = EnvironmentConfig(self._merge_configs(base_config, env_config))
        self.validator.validate_config(config.config)

        self._config = config
        return self._config

    def get_config(self) -> EnvironmentConfig:
        """
        Get the current configuration.

        Returns:
            EnvironmentConfig: Current configuration
        """
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def _load_yaml(self, filename: str) -> Dict[str, Any]:
        """
        Load YAML configuration file.

        Args:
            filename: Configuration file name

        Returns:
            Dict[str, Any]: Loaded configuration

        Raises:
            FileNotFoundError: If file is not found
        """
        file_path = self.config_dir / filename
        if not file_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def _merge_configs(
        self,
        base: Dict[str, Any],
        override: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Merge two configurations.

        Args:
            base: Base configuration
            override: Override configuration

        Returns:
            Dict[str, Any]: Merged configuration
        """
        result = base.copy()

        for key, value in override.items():
            if (
                key in result and
                isinstance(result[key], dict) and
                isinstance(value, dict)
            ):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result
