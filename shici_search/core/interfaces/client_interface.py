"""
Client interface definitions for external service interactions.

This module defines the abstract interfaces the search subsystem
depends on, so that the HTTP transport and the id policy can be
swapped out in tests.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from ..entities import RawResponse
from ...shared.exceptions.search_exceptions import InvalidDocumentIdError


class TransportInterface(ABC):
    """Interface for the HTTP transport to the search engine."""

    @abstractmethod
    def request(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None
    ) -> RawResponse:
        """
        Send a request to the search engine.

        Args:
            method: HTTP method (GET, POST, PUT or DELETE)
            path: Path relative to the engine base URL
            body: Optional JSON-serializable body

        Returns:
            RawResponse: Status and raw body of the response

        Raises:
            SearchTransportError: If the engine cannot be reached
        """
        pass

    def close(self) -> None:
        """Release any pooled connections."""
        pass


class IdValidatorInterface(ABC):
    """Interface for document id validation."""

    @abstractmethod
    def is_valid_id(self, document_id: Any) -> bool:
        """
        Check whether a document id is well formed.

        Args:
            document_id: The id to check

        Returns:
            bool: True if the id may be sent to the engine
        """
        pass

    def check_id(self, document_id: Any) -> str:
        """
        Return the id unchanged, or raise if it is malformed.

        Raises:
            InvalidDocumentIdError: If the id is not valid
        """
        if not self.is_valid_id(document_id):
            raise InvalidDocumentIdError(document_id)
        return document_id
