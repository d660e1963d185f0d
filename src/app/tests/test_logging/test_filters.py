# src/app/tests/test_logging/test_filters.py
import logging

import pytest

from app.core.logging.filters import (
    RedactFilter,
    RequestIdFilter,
    get_request_id,
    reset_request_id,
    set_request_id,
)


def make_record():
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


class TestRequestIdFilter:

    def test_defaults_to_dash(self, request_id):
        request_id(None)
        rec = make_record()

        assert RequestIdFilter().filter(rec) is True
        assert rec.request_id == "-"

    def test_uses_contextvar(self, request_id):
        request_id("abc-123")
        rec = make_record()

        RequestIdFilter().filter(rec)

        assert rec.request_id == "abc-123"
        assert get_request_id() == "abc-123"

    def test_respects_record_extra(self, request_id):
        request_id("context-id")
        rec = make_record()
        rec.request_id = "explicit"

        RequestIdFilter().filter(rec)

        assert rec.request_id == "explicit"


class TestRedactFilter:

    def test_masks_sensitive_extras(self):
        rec = make_record()
        rec.password = "hunter2"
        rec.email_address = "jane@uni-heidelberg.de"
        rec.login_name = "jane"

        assert RedactFilter().filter(rec) is True

        assert rec.password == RedactFilter.REDACTED
        assert rec.email_address == RedactFilter.REDACTED
        assert rec.login_name == "jane"
