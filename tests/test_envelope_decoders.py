"""
Tests for envelope decoder synthesis and caching.
"""

import threading
from dataclasses import dataclass

import pytest

from shici_search.core.entities import Poem, Poet, SearchableDocument
from shici_search.infrastructure.search.envelope_decoders import (
    DocumentEnvelopeDecoder,
    EnvelopeDecoderRegistry,
    HitEnvelopeDecoder
)
from shici_search.shared.exceptions.search_exceptions import (
    DecoderSynthesisError,
    SearchConfigurationError,
    SearchTransportError
)


class NotADocument:
    pass


@dataclass
class RequiredField(SearchableDocument):
    title: str


class TestRegistry:

    def test_decoder_is_built_once_per_type(self, decoders):
        first = decoders.hits_decoder(Poem)
        second = decoders.hits_decoder(Poem)
        assert first is second
        assert decoders.synthesis_count == 1

    def test_shapes_are_cached_separately(self, decoders):
        assert isinstance(decoders.hits_decoder(Poem), HitEnvelopeDecoder)
        assert isinstance(decoders.document_decoder(Poem), DocumentEnvelopeDecoder)
        decoders.hits_decoder(Poet)
        assert decoders.synthesis_count == 3
        assert len(decoders) == 3

    def test_unknown_type_is_synthesis_error(self, decoders):
        with pytest.raises(DecoderSynthesisError):
            decoders.hits_decoder(NotADocument)
        assert decoders.synthesis_count == 0

    def test_fields_without_defaults_are_rejected(self, decoders):
        with pytest.raises(DecoderSynthesisError) as exc_info:
            decoders.document_decoder(RequiredField)
        assert "title" in exc_info.value.message
        assert isinstance(exc_info.value, SearchConfigurationError)

    def test_concurrent_first_use_yields_one_decoder(self):
        registry = EnvelopeDecoderRegistry()
        barrier = threading.Barrier(8)
        results = []
        lock = threading.Lock()

        def worker():
            barrier.wait()
            decoder = registry.hits_decoder(Poem)
            with lock:
                results.append(decoder)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(d is results[0] for d in results)
        assert registry.synthesis_count == 1


class TestHitEnvelopeDecoder:

    def test_decodes_hits_in_order(self):
        decoder = HitEnvelopeDecoder(Poem)
        envelope = decoder({
            "hits": {
                "total": 2,
                "max_score": 1.5,
                "hits": [
                    {"_id": "a" * 16, "_score": 1.5, "_source": {"name": "静夜思", "form": 5}},
                    {"_id": "b" * 16, "_score": 0.3, "_source": {"name": "春晓"}},
                ]
            }
        })
        assert envelope.total == 2
        assert envelope.max_score == 1.5
        assert [h.score for h in envelope.hits] == [1.5, 0.3]
        assert envelope.hits[0].document == Poem(id="a" * 16, name="静夜思", form=5)
        assert envelope.hits[1].document.id == "b" * 16

    def test_total_as_object(self):
        envelope = HitEnvelopeDecoder(Poet)({
            "hits": {"total": {"value": 1, "relation": "eq"}, "hits": [
                {"_id": "c" * 16, "_score": 2.0, "_source": {"name": "李白"}}
            ]}
        })
        assert envelope.total == 1
        assert envelope.hits[0].document.name == "李白"

    def test_zero_total_ignores_hits(self):
        envelope = HitEnvelopeDecoder(Poem)({
            "hits": {"total": 0, "hits": [{"_id": "x", "_score": 1.0, "_source": {}}]}
        })
        assert envelope.total == 0
        assert envelope.hits == []

    def test_unknown_source_fields_are_ignored(self):
        envelope = HitEnvelopeDecoder(Poem)({
            "hits": {"total": 1, "hits": [
                {"_id": "d" * 16, "_score": 1.0, "_source": {"name": "登鹳雀楼", "legacy": True}}
            ]}
        })
        assert envelope.hits[0].document.name == "登鹳雀楼"

    def test_missing_hits_is_transport_error(self):
        with pytest.raises(SearchTransportError):
            HitEnvelopeDecoder(Poem)({"took": 1})


class TestDocumentEnvelopeDecoder:

    def test_found_document(self):
        envelope = DocumentEnvelopeDecoder(Poem)({
            "_index": "shici", "_type": "Poem", "_id": "e" * 16,
            "_version": 3, "found": True, "_source": {"content": "白日依山尽"}
        })
        assert envelope.found
        assert envelope.version == 3
        assert envelope.document == Poem(id="e" * 16, content="白日依山尽")

    def test_not_found_document(self):
        envelope = DocumentEnvelopeDecoder(Poem)({
            "_index": "shici", "_type": "Poem", "_id": "e" * 16, "found": False
        })
        assert not envelope.found
        assert envelope.document is None
