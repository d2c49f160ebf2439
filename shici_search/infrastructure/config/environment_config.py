"""
Environment configuration for environment-specific settings.

This module wraps the merged configuration dictionary, applies
environment variable overrides and exposes typed getters.
"""

from typing import Dict, Any, Optional, Tuple
import os


class EnvironmentConfig:
    """
    Environment-specific configuration.

    Environment variables win over file values:
    SHICI_SEARCH_URL for the engine URL and LOG_LEVEL for logging.
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize the configuration.

        Args:
            config: Merged configuration
        """
        self.config = config
        self._apply_environment_overrides()

    def _apply_environment_overrides(self) -> None:
        """Apply environment variable overrides to configuration."""
        if "SHICI_SEARCH_URL" in os.environ:
            self.config.setdefault("search_engine", {})["url"] = os.environ["SHICI_SEARCH_URL"]

        if "LOG_LEVEL" in os.environ:
            self.config.setdefault("logging", {})["level"] = os.environ["LOG_LEVEL"]

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def get_search_engine_url(self) -> str:
        """
        Get the search engine base URL.

        Returns:
            str: Base URL
        """
        return self.config["search_engine"]["url"]

    def get_search_engine_timeout(self) -> Tuple[float, float]:
        """
        Get the (connect, read) timeout in seconds.

        Returns:
            Tuple[float, float]: Timeouts
        """
        engine = self.config["search_engine"]
        return (
            engine.get("connect_timeout_seconds", 5.0),
            engine.get("timeout_seconds", 30.0)
        )

    def get_search_engine_headers(self) -> Optional[Dict[str, str]]:
        """Get additional headers sent with every engine request."""
        return self.config["search_engine"].get("headers")

    def get_default_max_results(self) -> int:
        """
        Get the result cap used when the caller gives none.

        Returns:
            int: Default max results
        """
        return self.config.get("search", {}).get("default_max_results", 20)

    def get_max_results_limit(self) -> int:
        """
        Get the largest result cap a caller may ask for.

        Returns:
            int: Max results limit
        """
        return self.config.get("search", {}).get("max_results_limit", 100)

    def get_min_score(self) -> float:
        """
        Get the exclusive score threshold for search hits.

        Returns:
            float: Minimum score
        """
        return float(self.config.get("search", {}).get("min_score", 0.0))

    def get_default_index(self) -> str:
        """Get the index used by the CLI and HTTP surfaces by default."""
        return self.config.get("search", {}).get("default_index", "shici")

    def get_log_level(self) -> str:
        """
        Get logging level.

        Returns:
            str: Logging level
        """
        return self.config.get("logging", {}).get("level", "INFO").upper()
