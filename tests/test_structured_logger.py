"""
Tests for structured logging.
"""

import io
import json

from shici_search.shared.logging.logger_interface import LogLevel
from shici_search.shared.logging.structured_logger import configure_logging


def _entries(stream):
    return [json.loads(line) for line in stream.getvalue().splitlines()]


def test_entries_are_json_with_context():
    stream = io.StringIO()
    logger = configure_logging("shici_search.test.json", output=stream)

    logger.info("Search completed", total=3, tokens=["明月"])

    entry = _entries(stream)[-1]
    assert entry["level"] == "INFO"
    assert entry["logger"] == "shici_search.test.json"
    assert entry["message"] == "Search completed"
    assert entry["context"] == {"total": 3, "tokens": ["明月"]}


def test_bound_context_is_merged():
    stream = io.StringIO()
    logger = configure_logging("shici_search.test.bind", output=stream)
    bound = logger.bind(index="shici", type="Poem")

    bound.info("Query", tokens=["月"])
    logger.info("Plain")

    first, second = _entries(stream)
    assert first["context"] == {"index": "shici", "type": "Poem", "tokens": ["月"]}
    assert second["context"] == {}


def test_level_filtering():
    stream = io.StringIO()
    logger = configure_logging("shici_search.test.level", level="warning", output=stream)

    logger.info("hidden")
    logger.error("shown")

    assert [e["message"] for e in _entries(stream)] == ["shown"]
    assert logger.level is LogLevel.WARNING
    assert logger.bind(x=1).level is LogLevel.WARNING


def test_exception_entry():
    stream = io.StringIO()
    logger = configure_logging("shici_search.test.exc", output=stream)

    try:
        raise RuntimeError("boom")
    except RuntimeError as e:
        logger.exception("Failed", exc_info=e)

    entry = _entries(stream)[-1]
    assert entry["level"] == "ERROR"
    assert entry["exception"]["type"] == "RuntimeError"
    assert entry["exception"]["message"] == "boom"


def test_handler_is_attached_once():
    stream = io.StringIO()
    configure_logging("shici_search.test.once", output=stream)
    logger = configure_logging("shici_search.test.once", output=stream)

    logger.info("once")

    assert len(_entries(stream)) == 1
