"""
Tests for mapping derivation from declared document fields.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

import pytest

from shici_search.core.entities import FieldKind, Poem, SearchableDocument, searchable_field
from shici_search.domain.search.mapping_builder import MappingBuilder
from shici_search.shared.exceptions.search_exceptions import (
    SearchConfigurationError,
    UnsupportedFieldTypeError
)


@dataclass
class Note(SearchableDocument):
    text: str = searchable_field(analyzed=True, default="")
    attachments: Dict[str, str] = field(default_factory=dict)


@dataclass
class Measured(SearchableDocument):
    title: Optional[str] = None
    rank: int = 0
    weight: float = 0.0
    views: int = searchable_field(kind=FieldKind.LONG, default=0)
    ratio: float = searchable_field(kind=FieldKind.DOUBLE, default=0.0)
    created: Optional[datetime] = None


@dataclass
class BrokenAnalyzed(SearchableDocument):
    keywords: List[str] = searchable_field(analyzed=True, default_factory=list)


@pytest.fixture
def builder():
    return MappingBuilder()


class TestMappingBuilder:

    def test_analyzed_string_and_unsupported_field(self, builder):
        assert builder.build_mapping(Note) == {
            "text": {"type": "text", "index": "analyzed"}
        }

    def test_type_inference_and_explicit_kinds(self, builder):
        assert builder.build_mapping(Measured) == {
            "title": {"type": "text", "index": "not_analyzed"},
            "rank": {"type": "integer", "index": "not_analyzed"},
            "weight": {"type": "float", "index": "not_analyzed"},
            "views": {"type": "long", "index": "not_analyzed"},
            "ratio": {"type": "double", "index": "not_analyzed"},
        }

    def test_id_is_not_mapped(self, builder):
        assert "id" not in builder.build_mapping(Poem)

    def test_poem_mapping(self, builder):
        mapping = builder.build_mapping(Poem)
        assert mapping["content"] == {"type": "text", "index": "analyzed"}
        assert mapping["dynasty_id"] == {"type": "text", "index": "not_analyzed"}
        assert mapping["form"] == {"type": "integer", "index": "not_analyzed"}
        assert mapping["version"] == {"type": "long", "index": "not_analyzed"}
        assert "tags" not in mapping

    def test_unsupported_analyzed_field_is_configuration_error(self, builder):
        with pytest.raises(UnsupportedFieldTypeError) as exc_info:
            builder.build_mapping(BrokenAnalyzed)
        assert exc_info.value.field_name == "keywords"
        assert isinstance(exc_info.value, SearchConfigurationError)

    def test_mapping_request_wraps_properties(self, builder):
        assert builder.build_mapping_request(Note) == {
            "properties": {"text": {"type": "text", "index": "analyzed"}}
        }

    def test_analyzed_fields_are_cached(self, builder, monkeypatch):
        assert builder.analyzed_fields(Note) == ["text"]

        calls = []
        original = Note.describe_fields.__func__

        def counting(cls):
            calls.append(cls)
            return original(cls)

        monkeypatch.setattr(Note, "describe_fields", classmethod(counting))
        assert builder.analyzed_fields(Note) == ["text"]
        assert calls == []

    def test_analyzed_fields_of_poem(self, builder):
        assert builder.analyzed_fields(Poem) == [
            "poet_name", "poet_name_cht", "name", "name_cht", "content", "content_cht"
        ]
