"""
Structured logger implementation.

Each entry is one JSON object per line:

    {"timestamp": ..., "level": "INFO", "logger": "shici_search.search",
     "message": "Search completed", "context": {"index": "shici", ...}}
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO, Union

from .logger_interface import LoggerInterface, LogLevel


class StructuredLogger(LoggerInterface):
    """
    JSON logger routed through the logging module.

    Going through logging.getLogger() keeps entries visible to handlers
    installed elsewhere, such as pytest's caplog.
    """

    def __init__(
        self,
        name: str,
        level: LogLevel = LogLevel.INFO,
        output: Optional[TextIO] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Minimum level emitted
            output: Stream to attach a handler to; None attaches nothing
            context: Context added to every entry
        """
        self.name = name
        self.context: Dict[str, Any] = dict(context or {})
        self._logger = logging.getLogger(name)
        self.set_level(level)
        if output is not None:
            self._attach(output)

    def _attach(self, output: TextIO) -> None:
        if any(getattr(h, "_structured", False) for h in self._logger.handlers):
            return
        handler = logging.StreamHandler(output)
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._structured = True
        self._logger.addHandler(handler)

    def set_level(self, level: Union[LogLevel, str]) -> None:
        self.level = LogLevel.parse(level)
        self._logger.setLevel(self.level.numeric)

    def bind(self, **context: Any) -> "StructuredLogger":
        return StructuredLogger(self.name, self.level, context={**self.context, **context})

    def entry(
        self,
        level: LogLevel,
        message: str,
        exc_info: Optional[BaseException] = None,
        **context: Any
    ) -> Dict[str, Any]:
        """Build the entry dict for one log call."""
        entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level.value,
            "logger": self.name,
            "message": message,
            "context": {**self.context, **context}
        }
        if exc_info is not None:
            entry["exception"] = {
                "type": type(exc_info).__name__,
                "message": str(exc_info),
                "traceback": traceback.format_exception(type(exc_info), exc_info, exc_info.__traceback__)
            }
        return entry

    def log(
        self,
        level: LogLevel,
        message: str,
        exc_info: Optional[BaseException] = None,
        **context: Any
    ) -> None:
        if not self.is_enabled_for(level):
            return
        entry = self.entry(level, message, exc_info, **context)
        self._logger.log(level.numeric, json.dumps(entry, ensure_ascii=False, default=str))


def configure_logging(
    name: str = "shici_search",
    level: Union[LogLevel, str] = LogLevel.INFO,
    output: Optional[TextIO] = sys.stdout
) -> StructuredLogger:
    """
    Configure and return a StructuredLogger instance.

    Args:
        name: Logger name
        level: Logging level, as LogLevel or its name
        output: Output stream for logs

    Returns:
        StructuredLogger: Configured logger instance
    """
    return StructuredLogger(name=name, level=LogLevel.parse(level), output=output)
