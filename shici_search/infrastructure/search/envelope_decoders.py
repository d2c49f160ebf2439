"""
Per-type decoders for the engine's generic response envelopes.

The hit envelope and the document envelope have the same structure for
every document type, but decoding a ``_source`` body needs the concrete
type. A decoder is derived once per (envelope shape, document type) and
kept for the lifetime of the registry.
"""

import dataclasses
import logging
import threading
from typing import Any, Callable, Dict, Generic, Mapping, Type, TypeVar

from ...core.entities import (
    DocumentEnvelope,
    Hit,
    HitEnvelope,
    SearchableDocument
)
from ...shared.exceptions.search_exceptions import DecoderSynthesisError, SearchTransportError

logger = logging.getLogger(__name__)

D = TypeVar('D', bound=SearchableDocument)


class _SourceDecoder(Generic[D]):
    """Builds documents of one type from engine source bodies."""

    def __init__(self, document_type: Type[D]):
        if not isinstance(document_type, type) or not issubclass(document_type, SearchableDocument):
            raise DecoderSynthesisError(
                f"{document_type!r} is not a SearchableDocument subclass",
                document_type=repr(document_type)
            )
        if not dataclasses.is_dataclass(document_type):
            raise DecoderSynthesisError(
                f"{document_type.__name__} must be a dataclass",
                document_type=document_type.__name__
            )
        fields = {f.name: f for f in dataclasses.fields(document_type) if f.init}
        required = [
            name for name, f in fields.items()
            if name != "id"
            and f.default is dataclasses.MISSING
            and f.default_factory is dataclasses.MISSING
        ]
        if required:
            raise DecoderSynthesisError(
                f"{document_type.__name__} has fields without defaults: {', '.join(required)}",
                document_type=document_type.__name__
            )
        self.document_type = document_type
        self.field_names = frozenset(fields) - {"id"}

    def __call__(self, document_id: str, source: Mapping[str, Any]) -> D:
        values = {k: v for k, v in (source or {}).items() if k in self.field_names}
        return self.document_type(id=document_id, **values)


class HitEnvelopeDecoder(Generic[D]):
    """Decodes a search response body into HitEnvelope[D]."""

    def __init__(self, document_type: Type[D]):
        self.document_type = document_type
        self._source = _SourceDecoder(document_type)

    def __call__(self, data: Mapping[str, Any]) -> HitEnvelope[D]:
        try:
            hits = data["hits"]
            total = hits.get("total", 0)
            if isinstance(total, Mapping):
                total = total.get("value", 0)
            envelope: HitEnvelope[D] = HitEnvelope(total=int(total), max_score=hits.get("max_score"))
            if envelope.total == 0:
                return envelope
            for h in hits.get("hits", []):
                envelope.hits.append(Hit(
                    score=float(h.get("_score") or 0.0),
                    document=self._source(h.get("_id"), h.get("_source", {}))
                ))
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise SearchTransportError(
                f"Unexpected search response for {self.document_type.__name__}: {e}",
                cause=e
            ) from e
        return envelope


class DocumentEnvelopeDecoder(Generic[D]):
    """Decodes a single document GET body into DocumentEnvelope[D]."""

    def __init__(self, document_type: Type[D]):
        self.document_type = document_type
        self._source = _SourceDecoder(document_type)

    def __call__(self, data: Mapping[str, Any]) -> DocumentEnvelope[D]:
        try:
            found = bool(data.get("found", True))
            document_id = data.get("_id")
            return DocumentEnvelope(
                index=data.get("_index", ""),
                type=data.get("_type", self.document_type.type_name()),
                id=document_id,
                found=found,
                version=data.get("_version"),
                document=self._source(document_id, data.get("_source", {})) if found else None
            )
        except (TypeError, AttributeError) as e:
            raise SearchTransportError(
                f"Unexpected document response for {self.document_type.__name__}: {e}",
                cause=e
            ) from e


class EnvelopeDecoderRegistry:
    """
    Caches of synthesized envelope decoders, one per envelope shape.

    Synthesis runs outside the lock and the result is published with
    setdefault under the lock, so concurrent first use for a type may
    build twice but every caller gets the single stored decoder.
    """

    def __init__(self):
        self._hits: Dict[type, HitEnvelopeDecoder] = {}
        self._docs: Dict[type, DocumentEnvelopeDecoder] = {}
        self._lock = threading.Lock()
        self.synthesis_count = 0

    def hits_decoder(self, document_type: Type[D]) -> HitEnvelopeDecoder[D]:
        """Return the hit envelope decoder for a document type."""
        return self._get(self._hits, HitEnvelopeDecoder, document_type)

    def document_decoder(self, document_type: Type[D]) -> DocumentEnvelopeDecoder[D]:
        """Return the document envelope decoder for a document type."""
        return self._get(self._docs, DocumentEnvelopeDecoder, document_type)

    def _get(self, cache: Dict[type, Any], factory: Callable[[type], Any], document_type: type) -> Any:
        decoder = cache.get(document_type)
        if decoder is not None:
            return decoder
        built = factory(document_type)
        with self._lock:
            decoder = cache.setdefault(document_type, built)
            if decoder is built:
                self.synthesis_count += 1
                logger.debug(f"Synthesized {factory.__name__} for {document_type.__name__}")
        return decoder

    def __len__(self) -> int:
        return len(self._hits) + len(self._docs)
