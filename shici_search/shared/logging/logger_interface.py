"""
Logger interface for standardized logging across the application.

Implementations only provide log() and bind(); the level helpers are
shared.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional
import logging


class LogLevel(Enum):
    """Standard log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def numeric(self) -> int:
        """Numeric level as used by the logging module."""
        return getattr(logging, self.value)

    @classmethod
    def parse(cls, level: Any) -> "LogLevel":
        """Accept a LogLevel or a level name in any case."""
        return level if isinstance(level, cls) else cls(str(level).upper())


class LoggerInterface(ABC):
    """
    Interface for logging implementations.

    Keyword arguments passed to any method are attached to the entry
    as context.
    """

    level: LogLevel = LogLevel.INFO

    @abstractmethod
    def log(
        self,
        level: LogLevel,
        message: str,
        exc_info: Optional[BaseException] = None,
        **context: Any
    ) -> None:
        """
        Emit one entry.

        Args:
            level: Entry level; entries below self.level are dropped
            message: Human readable message
            exc_info: Exception to attach to the entry
            **context: Context fields
        """

    @abstractmethod
    def bind(self, **context: Any) -> "LoggerInterface":
        """Return a logger that adds context to every entry."""

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level.numeric >= self.level.numeric

    def debug(self, message: str, **context: Any) -> None:
        self.log(LogLevel.DEBUG, message, **context)

    def info(self, message: str, **context: Any) -> None:
        self.log(LogLevel.INFO, message, **context)

    def warning(self, message: str, **context: Any) -> None:
        self.log(LogLevel.WARNING, message, **context)

    def error(self, message: str, **context: Any) -> None:
        self.log(LogLevel.ERROR, message, **context)

    def exception(self, message: str, exc_info: Optional[BaseException] = None, **context: Any) -> None:
        self.log(LogLevel.ERROR, message, exc_info=exc_info, **context)
