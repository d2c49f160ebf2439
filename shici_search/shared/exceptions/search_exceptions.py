"""
Exception hierarchy for the search subsystem.

Errors fall into four kinds so that callers can apply different
policies to them:

- configuration errors: a document type was declared incorrectly
- contract violations: the caller passed an invalid document id
- engine errors: the search engine answered with a non-2xx status
- transport errors: the engine could not be reached or answered garbage
"""

from typing import Any, Dict, Optional


class SearchError(Exception):
    """Base class for all search subsystem errors."""

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary.

        Returns:
            Dict[str, Any]: Dictionary representation
        """
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "context": self.context
        }


class SearchConfigurationError(SearchError):
    """A document type cannot be mapped or decoded. Not retryable."""


class UnsupportedFieldTypeError(SearchConfigurationError):
    """An analyzed field has a type with no engine mapping."""

    def __init__(self, field_name: str, kind: Any):
        super().__init__(
            f"Type {kind!r} of field '{field_name}' is not supported.",
            field=field_name,
            kind=str(kind)
        )
        self.field_name = field_name
        self.kind = kind


class DecoderSynthesisError(SearchConfigurationError):
    """No envelope decoder can be derived for a document type."""


class InvalidDocumentIdError(SearchError, ValueError):
    """A document operation was called with a malformed id."""

    def __init__(self, document_id: Any, reason: Optional[str] = None):
        message = f"Invalid document id: {document_id!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message, document_id=document_id)
        self.document_id = document_id
        self.reason = reason


class SearchEngineError(SearchError):
    """
    The search engine reported an error.

    Carries the HTTP status and whatever error type and reason the
    engine put into the response body.
    """

    def __init__(
        self,
        status: int,
        reason: str = "",
        error_type: Optional[str] = None,
        body: Optional[Dict[str, Any]] = None
    ):
        message = f"Search engine error {status}"
        if error_type:
            message += f" [{error_type}]"
        if reason:
            message += f": {reason}"
        super().__init__(message, status=status, error_type=error_type)
        self.status = status
        self.reason = reason
        self.error_type = error_type
        self.body = body or {}

    @property
    def is_not_found(self) -> bool:
        """Whether the engine reported a missing index or document."""
        return self.status == 404

    @classmethod
    def from_body(cls, status: int, body: Dict[str, Any]) -> "SearchEngineError":
        """
        Build an engine error from a decoded error body.

        Accepts both the legacy form ``{"error": "...", "status": 404}``
        and the object form ``{"error": {"type": ..., "reason": ...}}``.

        Args:
            status: HTTP status of the response
            body: Decoded response body

        Returns:
            SearchEngineError: The error
        """
        if not isinstance(body, dict):
            return cls(status, reason=str(body))
        status = body.get("status", status) if isinstance(body.get("status"), int) else status
        error = body.get("error")
        if isinstance(error, dict):
            return cls(
                status,
                reason=error.get("reason", ""),
                error_type=error.get("type"),
                body=body
            )
        if error is None and body.get("found") is False:
            return cls(status, reason="document not found", error_type="not_found", body=body)
        return cls(status, reason=str(error or ""), body=body)


class SearchTransportError(SearchError):
    """Connection failures, timeouts and malformed responses."""

    def __init__(self, message: str, cause: Optional[BaseException] = None, **context: Any):
        super().__init__(message, **context)
        self.cause = cause
