import logging

import pytest

from countries_api.core.logging.filters import (
    REDACTED,
    RedactFilter,
    RequestIdFilter,
    reset_request_id,
    set_request_id,
)


def make_record():
    # name, level, pathname, lineno, msg, args, exc_info
    return logging.LogRecord("test", logging.INFO, __file__, 1, "hello %s", ("world",), None)


@pytest.fixture
def request_id():
    """Set a request id for one test and restore the previous value afterwards."""
    tokens = []

    def _set(value):
        tokens.append(set_request_id(value))

    yield _set
    for token in reversed(tokens):
        reset_request_id(token)


def test_request_id_filter_defaults_to_dash(request_id):
    rec = make_record()
    request_id(None)

    assert RequestIdFilter().filter(rec) is True
    assert rec.request_id == "-"


def test_request_id_filter_uses_contextvar(request_id):
    rec = make_record()
    request_id("abc-123")

    RequestIdFilter().filter(rec)

    assert rec.request_id == "abc-123"


def test_request_id_filter_respects_record_extra(request_id):
    rec = make_record()
    rec.request_id = "explicit"
    request_id("context-id")

    RequestIdFilter().filter(rec)

    assert rec.request_id == "explicit"


def test_redact_filter_masks_sensitive_extras():
    rec = make_record()
    rec.authorization = "Bearer abc"
    rec.Password = "hunter2"
    rec.country_id = "keep-me"

    assert RedactFilter().filter(rec) is True

    assert rec.authorization == REDACTED
    assert rec.Password == REDACTED
    assert rec.country_id == "keep-me"
