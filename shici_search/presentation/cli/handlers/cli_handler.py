"""
CLI handler for managing command execution.

Commands implement execute(); run() turns the errors a user can cause
(unknown type names, bad ids, engine and transport failures) into a
printed error and a failed CommandResult.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from ..formatters.output_formatter import OutputFormatter
from ....application.services.search_application_service import SearchApplicationService
from ....shared.exceptions.search_exceptions import SearchError


@dataclass
class CommandResult:
    """Result of a command execution."""

    success: bool
    message: str
    data: Optional[Any] = None
    error: Optional[Exception] = None

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1


class CommandHandler(ABC):
    """Base class for command handlers."""

    def __init__(self, formatter: OutputFormatter):
        self.formatter = formatter

    @abstractmethod
    def execute(self, **kwargs) -> CommandResult:
        """
        Execute the command.

        Args:
            **kwargs: Command arguments

        Returns:
            CommandResult: Command execution result
        """

    def run(self, **kwargs) -> CommandResult:
        """Execute the command, reporting search and lookup errors."""
        try:
            return self.execute(**kwargs)
        except KeyError as e:
            return self.handle_error(e, f"{self.__class__.__name__} failed", e.args[0] if e.args else None)
        except SearchError as e:
            return self.handle_error(e, f"{self.__class__.__name__} failed", e.message)

    def handle_error(
        self,
        error: Exception,
        message: str = "An error occurred",
        details: Optional[str] = None
    ) -> CommandResult:
        """
        Print an error and return a failed result.

        Args:
            error: Exception that occurred
            message: Headline of the error
            details: Text printed under the headline, str(error) by default

        Returns:
            CommandResult: Error result
        """
        self.formatter.print(self.formatter.format_error(message, details or str(error)))
        return CommandResult(success=False, message=message, error=error)

    def handle_success(
        self,
        message: str,
        data: Optional[Any] = None,
        details: Optional[str] = None
    ) -> CommandResult:
        """Print a success message and return a successful result."""
        self.formatter.print(self.formatter.format_success(message, details))
        return CommandResult(success=True, message=message, data=data)


class SearchServiceCommand(CommandHandler):
    """Base for commands that talk to the search service."""

    def __init__(self, formatter: OutputFormatter, search_service: SearchApplicationService):
        super().__init__(formatter)
        self.search_service = search_service
