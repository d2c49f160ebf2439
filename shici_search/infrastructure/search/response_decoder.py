"""
Interpretation of raw engine responses.
"""

import json
import logging
from typing import Any, Callable, Optional, TypeVar

from ...core.entities import RawResponse
from ...shared.exceptions.search_exceptions import SearchEngineError, SearchTransportError

logger = logging.getLogger(__name__)

T = TypeVar('T')


class ResponseDecoder:
    """
    Turns a RawResponse into a value or an exception.

    2xx bodies are parsed as JSON and handed to the requested decoder.
    Anything else becomes a SearchEngineError built from the body.
    """

    def decode(
        self,
        response: RawResponse,
        decoder: Optional[Callable[[Any], T]] = None
    ) -> Any:
        """
        Decode a response.

        Args:
            response: Raw response from the transport
            decoder: Optional callable applied to the parsed JSON

        Returns:
            The decoded value, or the parsed JSON if no decoder is given

        Raises:
            SearchEngineError: If the status is not 2xx
            SearchTransportError: If a 2xx body is not valid JSON
        """
        if response.is_ok:
            logger.debug(f"Response: {response.body}")
            data = self._parse(response.body, strict=True)
            return decoder(data) if decoder else data

        logger.info(f"Error Response: {response.body}")
        raise SearchEngineError.from_body(response.status, self._parse(response.body, strict=False))

    @staticmethod
    def _parse(body: Optional[str], strict: bool) -> Any:
        if not body:
            return {}
        try:
            return json.loads(body)
        except ValueError as e:
            if strict:
                raise SearchTransportError(f"Malformed response body: {e}", cause=e) from e
            return {"error": body}
