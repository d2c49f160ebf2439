"""
Test configuration and fixtures for the search subsystem tests.
"""

import json
import pytest
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import Mock

from shici_search.application.services.search_application_service import SearchApplicationService
from shici_search.core.entities import Poem, RawResponse
from shici_search.domain.search.mapping_builder import MappingBuilder
from shici_search.infrastructure.search.envelope_decoders import EnvelopeDecoderRegistry
from shici_search.shared.logging.structured_logger import configure_logging
from shici_search.shared.validation.id_validator import IdValidator

VALID_ID = "0123456789abcdef"


def hits_body(hits: List[Tuple[float, str, Dict[str, Any]]], total: Optional[int] = None) -> str:
    """Build a search response body from (score, id, source) triples."""
    return json.dumps({
        "took": 3,
        "timed_out": False,
        "hits": {
            "total": len(hits) if total is None else total,
            "max_score": max((h[0] for h in hits), default=None),
            "hits": [
                {"_index": "shici", "_type": "Poem", "_id": doc_id, "_score": score, "_source": source}
                for score, doc_id, source in hits
            ]
        }
    }, ensure_ascii=False)


@pytest.fixture
def raw_response():
    """Factory for RawResponse objects."""
    def _make(status: int = 200, body: Any = None) -> RawResponse:
        if body is not None and not isinstance(body, str):
            body = json.dumps(body, ensure_ascii=False)
        return RawResponse(status=status, body=body)
    return _make


@pytest.fixture
def hits_response():
    """Factory for 200 search responses."""
    def _make(hits: List[Tuple[float, str, Dict[str, Any]]], total: Optional[int] = None) -> RawResponse:
        return RawResponse(status=200, body=hits_body(hits, total))
    return _make


@pytest.fixture
def valid_id() -> str:
    return VALID_ID


@pytest.fixture
def mock_transport():
    """Mock transport answering 200 with an empty JSON object."""
    transport = Mock()
    transport.request.return_value = RawResponse(status=200, body="{}")
    return transport


@pytest.fixture
def decoders() -> EnvelopeDecoderRegistry:
    return EnvelopeDecoderRegistry()


@pytest.fixture
def search_service(mock_transport, decoders) -> SearchApplicationService:
    """SearchApplicationService with the transport mocked."""
    return SearchApplicationService(
        transport=mock_transport,
        mapping_builder=MappingBuilder(),
        decoders=decoders,
        id_validator=IdValidator(),
        logger=configure_logging("shici_search.test", output=None)
    )


@pytest.fixture
def poem() -> Poem:
    return Poem(
        id=VALID_ID,
        dynasty_id="tang",
        poet_id="libai",
        poet_name="李白",
        name="静夜思",
        content="床前明月光，疑是地上霜。举头望明月，低头思故乡。",
        form=5,
        tags=["月"],
        version=1
    )


@pytest.fixture
def config_dir(tmp_path):
    """Directory with a minimal base.yaml."""
    (tmp_path / "base.yaml").write_text(
        "search_engine:\n"
        "  url: http://es.test:9200/\n"
        "search:\n"
        "  default_index: shici\n"
        "  default_max_results: 5\n"
        "  max_results_limit: 10\n"
        "logging:\n"
        "  level: INFO\n",
        encoding="utf-8"
    )
    return tmp_path
