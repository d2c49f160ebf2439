"""
Core entities module for shici search.

This module provides access to all core entity classes used throughout
the application.
"""

from .document_entity import (
    FieldKind,
    FieldSpec,
    SearchableDocument,
    searchable_field,
    Poem,
    Poet,
    DOCUMENT_TYPES,
    resolve_document_type
)
from .search_entity import (
    RawResponse,
    Hit,
    HitEnvelope,
    DocumentEnvelope,
    SearchRequest
)

__all__ = [
    'FieldKind',
    'FieldSpec',
    'SearchableDocument',
    'searchable_field',
    'Poem',
    'Poet',
    'DOCUMENT_TYPES',
    'resolve_document_type',
    'RawResponse',
    'Hit',
    'HitEnvelope',
    'DocumentEnvelope',
    'SearchRequest'
]
