"""
Index commands for CLI.

This module provides command handlers for the index lifecycle.
"""

from ..handlers.cli_handler import CommandResult, SearchServiceCommand

ACTIONS = ("create", "delete", "exists")


class IndexCommand(SearchServiceCommand):
    """
    Command handler for creating, deleting and probing an index.
    """

    def execute(self, action: str, index: str, **kwargs) -> CommandResult:
        """
        Execute the index command.

        Args:
            action: One of create, delete, exists
            index: Index name

        Returns:
            CommandResult: Command execution result
        """
        if action == "exists":
            exists = self.search_service.index_exists(index)
            return self.handle_success(
                f"Index '{index}' {'exists' if exists else 'does not exist'}",
                data=exists
            )
        if action == "create":
            self.search_service.create_index(index)
            return self.handle_success(f"Index '{index}' created")
        if action == "delete":
            self.search_service.delete_index(index)
            return self.handle_success(f"Index '{index}' deleted")
        return self.handle_error(
            ValueError(f"Unknown action: {action}"),
            "Invalid index action"
        )
