"""
Search subsystem of the poetry archive.

Builds CJK-aware queries for a document-oriented search engine over
HTTP/JSON and decodes its responses into typed documents.
"""

from .application.services.search_application_service import SearchApplicationService
from .core.entities import FieldKind, Poem, Poet, SearchableDocument, searchable_field
from .shared.exceptions.search_exceptions import (
    DecoderSynthesisError,
    InvalidDocumentIdError,
    SearchConfigurationError,
    SearchEngineError,
    SearchError,
    SearchTransportError,
    UnsupportedFieldTypeError
)

__version__ = "1.0.0"

__all__ = [
    'SearchApplicationService',
    'FieldKind',
    'Poem',
    'Poet',
    'SearchableDocument',
    'searchable_field',
    'DecoderSynthesisError',
    'InvalidDocumentIdError',
    'SearchConfigurationError',
    'SearchEngineError',
    'SearchError',
    'SearchTransportError',
    'UnsupportedFieldTypeError'
]
