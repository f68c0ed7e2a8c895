"""Tests for structured logging."""

import json
import logging
import os
from io import StringIO
from unittest.mock import patch

import pytest
from hypothesis import given
from hypothesis import strategies as st

from unifeed.config import Config, ParserConfig
from unifeed.errors import RssMissingRequiredField, UnknownFeedFormat
from unifeed.feeds import FeedParser
from unifeed.json_feed import JsonFeedParser
from unifeed.logging_config import (
    COMPONENTS,
    LOGGER_PREFIX,
    StructuredFormatter,
    create_execution_logger,
    setup_structured_logging,
)


@pytest.fixture
def log_capture():
    """Route the unifeed loggers into a StringIO with the structured formatter."""
    capture = StringIO()
    handler = logging.StreamHandler(capture)
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("unifeed")
    original_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield capture
    finally:
        logger.removeHandler(handler)
        logger.setLevel(original_level)
        handler.close()


def _records(capture: StringIO) -> list[dict]:
    return [json.loads(line) for line in capture.getvalue().splitlines() if line.strip()]


@pytest.fixture
def restore_logger_levels():
    """Put the unifeed logger levels back after a test changes them."""
    names = (LOGGER_PREFIX,) + tuple(f"{LOGGER_PREFIX}.{c}" for c in COMPONENTS)
    original = {name: logging.getLogger(name).level for name in names}
    try:
        yield
    finally:
        for name, level in original.items():
            logging.getLogger(name).setLevel(level)


class TestLoggingUnit:
    """Structured log output of the parsers."""

    def test_successful_parse_is_logged(self, log_capture):
        FeedParser(execution_id="exec-1").parse(
            '<rss version="2.0"><channel><title>T</title><link>L</link>'
            "<description>D</description><item/></channel></rss>"
        )

        records = _records(log_capture)
        assert records, "No log output captured"
        assert all(record["execution_id"] == "exec-1" for record in records)

        detected = [r for r in records if r["message"] == "Detected feed format"]
        assert detected[0]["feed_type"] == "rss"
        assert detected[0]["logger"] == "unifeed.feed_parser"

        finished = [r for r in records if r.get("items_count") is not None]
        assert any(r["component"] == "feed_parser" and r["items_count"] == 1 for r in finished)
        assert any(r["logger"] == "unifeed.xml_parser" for r in records)

    def test_failure_is_logged_with_error_kind(self, log_capture):
        with pytest.raises(RssMissingRequiredField):
            FeedParser(execution_id="exec-2").parse(
                '<rss version="2.0"><channel><title>Only</title></channel></rss>'
            )

        warnings = [r for r in _records(log_capture) if r["level"] == "WARNING"]
        assert {r["component"] for r in warnings} == {"rss_parser", "feed_parser"}
        assert all(r["error_kind"] == "RssMissingRequiredField" for r in warnings)

    def test_unknown_format_is_logged(self, log_capture):
        with pytest.raises(UnknownFeedFormat):
            FeedParser().parse("<html/>")

        warnings = [r for r in _records(log_capture) if r["level"] == "WARNING"]
        assert warnings[0]["error_kind"] == "UnknownFeedFormat"

    def test_generated_execution_id(self):
        logger = create_execution_logger("xml_parser")

        assert logger.execution_id.startswith("exec_")
        assert logger.logger.name == "unifeed.xml_parser"

    def test_setup_structured_logging_installs_formatter(self):
        root_logger = logging.getLogger()
        original_level = root_logger.level
        original_handlers = root_logger.handlers[:]
        try:
            setup_structured_logging("warning")

            assert root_logger.level == logging.WARNING
            assert len(root_logger.handlers) == 1
            assert isinstance(root_logger.handlers[0].formatter, StructuredFormatter)
            assert logging.getLogger("unifeed.rss_parser").level == logging.WARNING
        finally:
            root_logger.handlers.clear()
            root_logger.handlers.extend(original_handlers)
            root_logger.setLevel(original_level)
            logging.getLogger(LOGGER_PREFIX).setLevel(logging.NOTSET)
            for component in COMPONENTS:
                logging.getLogger(f"{LOGGER_PREFIX}.{component}").setLevel(logging.NOTSET)


class TestLoggingProperties:
    """Property-based tests for the structured formatter."""

    @given(
        st.text(max_size=50),
        st.dictionaries(
            st.from_regex(r"ctx_[a-z]{1,8}", fullmatch=True),
            st.one_of(st.text(max_size=20), st.integers(), st.none()),
            max_size=4,
        ),
    )
    def test_every_record_is_one_json_object_property(self, message, context):
        """Any message and context renders as a single JSON line."""
        record = logging.LogRecord(
            "unifeed.feed_parser", logging.INFO, __file__, 1, message, None, None
        )
        for key, value in context.items():
            setattr(record, key, value)

        rendered = StructuredFormatter().format(record)

        assert "\n" not in rendered
        parsed = json.loads(rendered)
        assert parsed["message"] == message
        assert parsed["level"] == "INFO"
        for key, value in context.items():
            assert parsed[key] == value


JSON_FEED = (
    '{"version": "https://jsonfeed.org/version/1.1", "title": "X",'
    ' "items": [{"id": "1"}]}'
)


class TestLogLevelUnit:
    """The configured log level reaches the unifeed loggers."""

    def test_configured_level_applies_to_component_loggers(self, restore_logger_levels):
        with patch.dict(os.environ, {"UNIFEED_LOG_LEVEL": "error"}):
            parser_config = Config().get_parser_config()

        FeedParser(parser_config).parse(JSON_FEED)

        for component in COMPONENTS:
            logger = logging.getLogger(f"{LOGGER_PREFIX}.{component}")
            assert logger.getEffectiveLevel() == logging.ERROR

    def test_configured_level_filters_records(self, log_capture, restore_logger_levels):
        FeedParser(ParserConfig(log_level="WARNING")).parse(JSON_FEED)

        assert _records(log_capture) == []

        with pytest.raises(UnknownFeedFormat):
            FeedParser(ParserConfig(log_level="WARNING")).parse("<html/>")

        assert {r["level"] for r in _records(log_capture)} == {"WARNING"}

    def test_unset_level_leaves_loggers_alone(self, log_capture, restore_logger_levels):
        with patch.dict(os.environ, {}, clear=True):
            parser_config = Config().get_parser_config()

        FeedParser(parser_config, execution_id="exec-3").parse(JSON_FEED)

        assert logging.getLogger(LOGGER_PREFIX).level == logging.DEBUG
        assert any(r["level"] == "DEBUG" for r in _records(log_capture))

    def test_json_feed_parser_applies_configured_level(self, restore_logger_levels):
        parser = JsonFeedParser(ParserConfig(log_level="CRITICAL"))

        feed = parser.parse(JSON_FEED)

        assert feed.title == "X"
        assert parser.logger.logger.getEffectiveLevel() == logging.CRITICAL
