"""
Search factory for wiring the search service.

This module builds the transport, the process-wide caches and the
search service from configuration, enabling dependency injection and
easy swapping of implementations.
"""

from typing import Optional

from ...application.services.search_application_service import SearchApplicationService
from ...core.interfaces import TransportInterface
from ...domain.search.mapping_builder import MappingBuilder
from ...domain.search.query_builder import QueryBuilder
from ...shared.logging.structured_logger import configure_logging
from ...shared.validation.id_validator import IdValidator
from ..config.environment_config import EnvironmentConfig
from .envelope_decoders import EnvelopeDecoderRegistry
from .http_transport import HttpTransport
from .response_decoder import ResponseDecoder


class SearchFactory:
    """
    Factory for the search service and its collaborators.

    The decoder registry and the mapping builder are created once per
    factory and shared by every service it creates.
    """

    def __init__(self, config: EnvironmentConfig):
        """
        Initialize the factory.

        Args:
            config: Loaded configuration
        """
        self.config = config
        self.decoders = EnvelopeDecoderRegistry()
        self.mapping_builder = MappingBuilder()
        self._transport: Optional[TransportInterface] = None

    @property
    def transport(self) -> TransportInterface:
        """
        Get or create the HTTP transport.

        Returns:
            TransportInterface: Transport to the engine
        """
        if self._transport is None:
            self._transport = HttpTransport(
                base_url=self.config.get_search_engine_url(),
                timeout=self.config.get_search_engine_timeout(),
                additional_headers=self.config.get_search_engine_headers()
            )
        return self._transport

    def create_search_service(
        self,
        transport: Optional[TransportInterface] = None
    ) -> SearchApplicationService:
        """
        Create a search service.

        Args:
            transport: Optional transport replacing the configured one

        Returns:
            SearchApplicationService: The service
        """
        return SearchApplicationService(
            transport=transport or self.transport,
            query_builder=QueryBuilder(),
            mapping_builder=self.mapping_builder,
            decoders=self.decoders,
            response_decoder=ResponseDecoder(),
            id_validator=IdValidator(),
            min_score=self.config.get_min_score(),
            logger=configure_logging(
                "shici_search.search",
                level=self.config.get_log_level()
            )
        )

    def close(self) -> None:
        """Close the transport."""
        if self._transport is not None:
            self._transport.close()
            self._transport = None
