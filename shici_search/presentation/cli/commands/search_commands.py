"""
Search commands for CLI.

This module provides command handlers for full-text search and
single document operations.
"""

from typing import Sequence

from ..handlers.cli_handler import CommandHandler, CommandResult, SearchServiceCommand
from ....core.entities import resolve_document_type
from ....shared.validation.id_validator import next_id


class SearchCommand(SearchServiceCommand):
    """
    Command handler for document search.

    Query words are used as the token set, in the order given.
    """

    def execute(
        self,
        index: str,
        type_name: str,
        tokens: Sequence[str],
        max_results: int = 20,
        **kwargs
    ) -> CommandResult:
        """
        Execute the search command.

        Args:
            index: Index name
            type_name: Registered document type name
            tokens: Query tokens
            max_results: Result limit
            **kwargs: Additional arguments

        Returns:
            CommandResult: Command execution result
        """
        document_type = resolve_document_type(type_name)
        results = self.search_service.search(index, document_type, list(tokens), max_results)

        if not results:
            return self.handle_success("No results found", data=[])

        self.formatter.print(self.formatter.format_documents(results, title=f"{type_name} in {index}"))
        return self.handle_success(
            "Search completed successfully",
            data=results,
            details=f"Found {len(results)} results"
        )


class GetDocumentCommand(SearchServiceCommand):
    """Command handler for fetching one document by id."""

    def execute(self, index: str, type_name: str, document_id: str, **kwargs) -> CommandResult:
        document_type = resolve_document_type(type_name)
        document = self.search_service.get_document(index, document_type, document_id)
        if document is None:
            return self.handle_success("Document not found", data=None)

        self.formatter.print(self.formatter.format_document(document))
        return self.handle_success("Document retrieved successfully", data=document)


class NewIdCommand(CommandHandler):
    """Prints fresh document ids, one per line, for scripts that create documents."""

    def execute(self, count: int = 1, **kwargs) -> CommandResult:
        ids = [next_id() for _ in range(count)]
        for document_id in ids:
            self.formatter.print(document_id)
        return CommandResult(success=True, message=f"Generated {count} ids", data=ids)


class DeleteDocumentCommand(SearchServiceCommand):
    """Command handler for deleting one document by id."""

    def execute(self, index: str, type_name: str, document_id: str, **kwargs) -> CommandResult:
        document_type = resolve_document_type(type_name)
        self.search_service.delete_document(index, document_type, document_id)
        return self.handle_success(
            "Document deleted successfully",
            details=f"{index}/{type_name}/{document_id}"
        )


class MappingCommand(SearchServiceCommand):
    """Command handler for putting the mapping of a document type."""

    def execute(
        self,
        index: str,
        type_name: str,
        show_only: bool = False,
        **kwargs
    ) -> CommandResult:
        """
        Execute the mapping command.

        Args:
            index: Index name
            type_name: Registered document type name
            show_only: Print the derived mapping without sending it

        Returns:
            CommandResult: Command execution result
        """
        document_type = resolve_document_type(type_name)
        builder = self.search_service.mapping_builder
        mapping = builder.build_mapping(document_type)
        analyzed = f"Analyzed: {', '.join(builder.analyzed_fields(document_type)) or 'none'}"
        self.formatter.print(self.formatter.format_mapping(mapping, title=f"Mapping of {type_name}"))
        if show_only:
            return self.handle_success("Mapping built", data=mapping, details=analyzed)

        self.search_service.create_mapping(index, document_type)
        return self.handle_success(
            "Mapping created successfully",
            data=mapping,
            details=f"{index}/_mapping/{type_name}, {analyzed}"
        )
