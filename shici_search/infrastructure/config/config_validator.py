"""
Configuration validator for validating configuration values.

This module provides a validator for ensuring configuration values
meet the required format and constraints.
"""

from typing import Dict, Any, List
import re


class ConfigValidator:
    """
    Validator for configuration values.

    Collects every problem found and raises them together.
    """

    def __init__(self):
        """Initialize the validator."""
        self.errors: List[str] = []

    def validate_config(self, config: Dict[str, Any]) -> None:
        """
        Validate configuration.

        Args:
            config: Configuration to validate

        Raises:
            ValueError: If configuration is invalid
        """
        self.errors = []

        if "search_engine" not in config:
            self.errors.append("Missing required section: search_engine")
        else:
            self._validate_search_engine_config(config["search_engine"])

        if "search" in config:
            self._validate_search_config(config["search"])

        if "logging" in config:
            self._validate_logging_config(config["logging"])

        if self.errors:
            raise ValueError("\n".join(self.errors))

    def _validate_search_engine_config(self, config: Dict[str, Any]) -> None:
        """
        Validate search engine connection configuration.

        Args:
            config: Search engine configuration
        """
        url = config.get("url")
        if not isinstance(url, str) or not url:
            self.errors.append("Search engine URL must be a non-empty string")
        elif not re.match(r"^https?://", url):
            self.errors.append("Search engine URL must start with http:// or https://")

        if "timeout_seconds" in config:
            timeout = config["timeout_seconds"]
            if not isinstance(timeout, (int, float)) or timeout <= 0:
                self.errors.append("Search engine timeout must be a positive number")

        if "connect_timeout_seconds" in config:
            timeout = config["connect_timeout_seconds"]
            if not isinstance(timeout, (int, float)) or timeout <= 0:
                self.errors.append("Search engine connect timeout must be a positive number")

        if "headers" in config and not isinstance(config["headers"], dict):
            self.errors.append("Search engine headers must be a mapping")

    def _validate_search_config(self, config: Dict[str, Any]) -> None:
        """
        Validate search configuration.

        Args:
            config: Search configuration
        """
        if "default_max_results" in config:
            limit = config["default_max_results"]
            if not isinstance(limit, int) or limit <= 0:
                self.errors.append("Search default max results must be a positive integer")

        if "max_results_limit" in config:
            max_limit = config["max_results_limit"]
            if not isinstance(max_limit, int) or max_limit <= 0:
                self.errors.append("Search max results limit must be a positive integer")

        if "min_score" in config:
            min_score = config["min_score"]
            if not isinstance(min_score, (int, float)) or min_score < 0:
                self.errors.append("Search min score must be a non-negative number")

    def _validate_logging_config(self, config: Dict[str, Any]) -> None:
        """
        Validate logging configuration.

        Args:
            config: Logging configuration
        """
        if "level" in config:
            level = config["level"]
            valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
            if not isinstance(level, str) or level.upper() not in valid_levels:
                self.errors.append(
                    f"Logging level must be one of: {', '.join(valid_levels)}"
                )
