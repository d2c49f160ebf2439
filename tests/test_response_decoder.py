"""
Tests for raw response interpretation.
"""

import pytest

from shici_search.infrastructure.search.response_decoder import ResponseDecoder
from shici_search.shared.exceptions.search_exceptions import SearchEngineError, SearchTransportError


@pytest.fixture
def decoder():
    return ResponseDecoder()


class TestResponseDecoder:

    def test_ok_body_is_parsed(self, decoder, raw_response):
        assert decoder.decode(raw_response(200, {"acknowledged": True})) == {"acknowledged": True}

    def test_ok_body_goes_through_decoder(self, decoder, raw_response):
        result = decoder.decode(raw_response(201, {"_id": "x"}), lambda data: data["_id"])
        assert result == "x"

    def test_empty_ok_body(self, decoder, raw_response):
        assert decoder.decode(raw_response(200, None)) == {}

    def test_malformed_ok_body(self, decoder, raw_response):
        with pytest.raises(SearchTransportError):
            decoder.decode(raw_response(200, "<html>"))

    def test_object_error_body(self, decoder, raw_response):
        body = {
            "error": {"type": "index_not_found_exception", "reason": "no such index"},
            "status": 404
        }
        with pytest.raises(SearchEngineError) as exc_info:
            decoder.decode(raw_response(404, body))
        error = exc_info.value
        assert error.status == 404
        assert error.is_not_found
        assert error.error_type == "index_not_found_exception"
        assert error.reason == "no such index"

    def test_string_error_body(self, decoder, raw_response):
        with pytest.raises(SearchEngineError) as exc_info:
            decoder.decode(raw_response(400, {"error": "SearchPhaseExecutionException[...]", "status": 400}))
        assert exc_info.value.status == 400
        assert exc_info.value.reason.startswith("SearchPhaseExecutionException")
        assert not exc_info.value.is_not_found

    def test_missing_document_body(self, decoder, raw_response):
        with pytest.raises(SearchEngineError) as exc_info:
            decoder.decode(raw_response(404, {"_index": "shici", "found": False}))
        assert exc_info.value.is_not_found
        assert exc_info.value.error_type == "not_found"

    def test_unparsable_error_body(self, decoder, raw_response):
        with pytest.raises(SearchEngineError) as exc_info:
            decoder.decode(raw_response(502, "Bad Gateway"))
        assert exc_info.value.status == 502
        assert exc_info.value.reason == "Bad Gateway"

    def test_error_to_dict(self, decoder, raw_response):
        with pytest.raises(SearchEngineError) as exc_info:
            decoder.decode(raw_response(500, {"error": {"type": "boom", "reason": "failed"}}))
        data = exc_info.value.to_dict()
        assert data["type"] == "SearchEngineError"
        assert data["context"] == {"status": 500, "error_type": "boom"}
