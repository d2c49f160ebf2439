"""
HTTP transport for the search engine.

This module provides a thin client that sends JSON requests to the
engine base URL and hands back the raw status and body.
"""

import json
import logging
from typing import Any, Dict, Optional, Tuple, Union

import requests

from ...core.entities import RawResponse
from ...core.interfaces import TransportInterface
from ...shared.exceptions.search_exceptions import SearchTransportError

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json; charset=utf-8"}
METHODS = ("GET", "POST", "PUT", "DELETE")


class HttpTransport(TransportInterface):
    """
    Transport over a pooled requests session.

    Timeouts are the only cancellation mechanism; a timed out call
    fails with SearchTransportError and leaves nothing behind.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Union[float, Tuple[float, float]] = (5, 30),
        additional_headers: Optional[Dict[str, str]] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the transport.

        Args:
            base_url: Engine base URL, e.g. http://localhost:9200
            timeout: Seconds, or a (connect, read) tuple
            additional_headers: Optional headers sent with every request
            session: Optional session to reuse
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        if additional_headers:
            self.session.headers.update(additional_headers)

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None
    ) -> RawResponse:
        method = method.upper()
        if method not in METHODS:
            raise ValueError(f"Unsupported method: {method}")

        url = self.url_for(path)
        data = None
        headers = None
        if body is not None:
            data = json.dumps(body, ensure_ascii=False).encode("utf-8")
            headers = JSON_HEADERS
        elif method in ("PUT", "POST"):
            headers = JSON_HEADERS

        logger.info(f"{method}: {url}")
        try:
            resp = self.session.request(
                method,
                url,
                data=data,
                headers=headers,
                timeout=self.timeout
            )
        except requests.Timeout as e:
            raise SearchTransportError(f"Timed out: {method} {url}", cause=e, url=url) from e
        except requests.RequestException as e:
            raise SearchTransportError(f"Request failed: {method} {url}: {e}", cause=e, url=url) from e

        resp.encoding = resp.encoding or "utf-8"
        return RawResponse(status=resp.status_code, body=resp.text or None)

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()
