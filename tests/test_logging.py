"""Tests for structured log formatting."""

import logging

from app.core.logging import StructuredFormatter, get_logger, log_with_context


def _record(msg="hello world", **attrs):
    record = logging.LogRecord("app.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in attrs.items():
        setattr(record, key, value)
    return record


def test_key_value_output():
    line = StructuredFormatter().format(_record(request_id="r-1"))
    assert "level=INFO" in line
    assert "logger=app.test" in line
    assert 'message="hello world"' in line
    assert "request_id=r-1" in line


def test_provider_keys_are_redacted():
    line = StructuredFormatter().format(
        _record(extra_data={"provider": "openai", "x_ai_api_key": "sk-secret"})
    )
    assert "provider=openai" in line
    assert "x_ai_api_key=***" in line
    assert "sk-secret" not in line


def test_log_with_context_passes_fields(caplog):
    logger = get_logger("app.test.context")
    logger.propagate = True
    try:
        with caplog.at_level(logging.INFO, logger="app.test.context"):
            log_with_context(logger, logging.INFO, "booked", request_id="r-2", slot="09:15")
    finally:
        logger.propagate = False

    record = caplog.records[-1]
    assert record.request_id == "r-2"
    assert record.extra_data == {"slot": "09:15"}
