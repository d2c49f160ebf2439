"""
Application service for search operations.

This module composes the query builder, transport, response decoder
and envelope decoders into the public search operations: full-text
search, single document create/get/delete, mapping creation and index
lifecycle.
"""

import time
from typing import Any, List, Optional, Sequence, Type, TypeVar

from ...core.entities import SearchableDocument, SearchRequest
from ...core.interfaces import IdValidatorInterface, TransportInterface
from ...domain.search.mapping_builder import MappingBuilder
from ...domain.search.query_builder import QueryBuilder
from ...domain.search.search_domain_service import SearchDomainService
from ...infrastructure.search.envelope_decoders import EnvelopeDecoderRegistry
from ...infrastructure.search.response_decoder import ResponseDecoder
from ...shared.exceptions.search_exceptions import SearchEngineError
from ...shared.logging.logger_interface import LoggerInterface
from ...shared.logging.structured_logger import configure_logging
from ...shared.validation.id_validator import IdValidator

D = TypeVar('D', bound=SearchableDocument)


class SearchApplicationService:
    """
    Search facade over a document-oriented search engine.

    Paths follow the engine's REST layout:

        {index}                         index lifecycle
        {index}/_mapping/{type}         schema
        {index}/{type}/{id}             single documents
        {index}/{type}/_search          queries

    Every operation is a single synchronous call chain; the only shared
    state is in the injected decoder registry and mapping builder.
    """

    def __init__(
        self,
        transport: TransportInterface,
        query_builder: Optional[QueryBuilder] = None,
        mapping_builder: Optional[MappingBuilder] = None,
        decoders: Optional[EnvelopeDecoderRegistry] = None,
        response_decoder: Optional[ResponseDecoder] = None,
        id_validator: Optional[IdValidatorInterface] = None,
        min_score: float = SearchDomainService.DEFAULT_MIN_SCORE,
        logger: Optional[LoggerInterface] = None
    ):
        """
        Initialize the service.

        Args:
            transport: Transport to the engine
            query_builder: Query builder
            mapping_builder: Mapping builder, shared per process
            decoders: Envelope decoder registry, shared per process
            response_decoder: Response decoder
            id_validator: Document id validator
            min_score: Hits scoring at or below this are dropped
            logger: Structured logger
        """
        self.transport = transport
        self.query_builder = query_builder or QueryBuilder()
        self.mapping_builder = mapping_builder or MappingBuilder()
        self.decoders = decoders or EnvelopeDecoderRegistry()
        self.response_decoder = response_decoder or ResponseDecoder()
        self.id_validator = id_validator or IdValidator()
        self.min_score = min_score
        self.logger = logger or configure_logging("shici_search.search", output=None)

    # ------------------------------------------------------------------ #
    # Search
    # ------------------------------------------------------------------ #

    def search(
        self,
        index: str,
        document_type: Type[D],
        tokens: Sequence[str],
        max_results: int
    ) -> List[D]:
        """
        Search documents by query tokens.

        Args:
            index: Index name
            document_type: Document type to search and decode
            tokens: Query tokens, already segmented; only the first 3 are used
            max_results: Maximum number of documents to return

        Returns:
            List[D]: Documents in engine relevance order
        """
        log = self.logger.bind(index=index, type=document_type.type_name())
        tokens = SearchDomainService.normalize_tokens(tokens)
        if not tokens:
            log.info("Empty query, skip search")
            return []

        request = SearchRequest(index, document_type.type_name(), tokens, max_results)
        query = self.query_builder.build_search_request(tokens, max_results)
        log.info("Query", query=query, **request.to_dict())

        decoder = self.decoders.hits_decoder(document_type)
        started = time.perf_counter()
        envelope = self._call(
            "POST",
            f"{index}/{request.type_name}/_search",
            query,
            decoder
        )
        results = SearchDomainService.filter_hits(envelope, self.min_score, max_results)
        log.info(
            "Search completed",
            total=envelope.total,
            returned=len(results),
            query_time_ms=round((time.perf_counter() - started) * 1000, 2)
        )
        return results

    def search_text(
        self,
        index: str,
        document_type: Type[D],
        text: str,
        max_results: int
    ) -> List[D]:
        """Search with whitespace-separated free text."""
        return self.search(index, document_type, SearchDomainService.split_text(text), max_results)

    # ------------------------------------------------------------------ #
    # Documents
    # ------------------------------------------------------------------ #

    def create_document(self, index: str, document: SearchableDocument) -> None:
        """
        Create or overwrite a document.

        Raises:
            InvalidDocumentIdError: If the document id is malformed
        """
        document_id = self.id_validator.check_id(document.id)
        self._call(
            "PUT",
            f"{index}/{document.type_name()}/{document_id}",
            document.to_source()
        )

    def get_document(self, index: str, document_type: Type[D], document_id: str) -> Optional[D]:
        """
        Get a document by id.

        Returns:
            Optional[D]: The document, or None if the engine reports it not found

        Raises:
            InvalidDocumentIdError: If the id is malformed
            SearchEngineError: If the engine answers with an error,
                including 404 for a missing document or index
        """
        document_id = self.id_validator.check_id(document_id)
        decoder = self.decoders.document_decoder(document_type)
        envelope = self._call(
            "GET",
            f"{index}/{document_type.type_name()}/{document_id}",
            None,
            decoder
        )
        return envelope.document

    def delete_document(self, index: str, document_type: Type[SearchableDocument], document_id: str) -> None:
        """
        Delete a document by id.

        Raises:
            InvalidDocumentIdError: If the id is malformed
        """
        document_id = self.id_validator.check_id(document_id)
        self._call("DELETE", f"{index}/{document_type.type_name()}/{document_id}")

    # ------------------------------------------------------------------ #
    # Index and mapping
    # ------------------------------------------------------------------ #

    def create_mapping(self, index: str, document_type: Type[SearchableDocument]) -> None:
        """Derive the mapping of a document type and put it into an index."""
        body = self.mapping_builder.build_mapping_request(document_type)
        self._call("PUT", f"{index}/_mapping/{document_type.type_name()}", body)

    def index_exists(self, index: str) -> bool:
        """
        Check if an index exists.

        Only a not-found answer means False; other engine errors propagate.
        """
        try:
            self._call("GET", index)
        except SearchEngineError as e:
            if e.is_not_found:
                return False
            raise
        return True

    def create_index(self, index: str) -> None:
        """Create a new index."""
        self._call("PUT", index)

    def delete_index(self, index: str) -> None:
        """Delete an index."""
        self._call("DELETE", index)

    def close(self) -> None:
        """Close the transport."""
        self.transport.close()

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _call(self, method: str, path: str, body: Any = None, decoder: Any = None) -> Any:
        response = self.transport.request(method, path, body)
        return self.response_decoder.decode(response, decoder)
