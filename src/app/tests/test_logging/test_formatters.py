# src/app/tests/test_logging/test_formatters.py
import json
import logging
import sys

from app.core.logging.formatters import ColorFormatter, JsonFormatter


def make_record(**extras):
    rec = logging.LogRecord("app.services", logging.INFO, __file__, 10, "hello %s", ("tester",), None)
    for key, value in extras.items():
        setattr(rec, key, value)
    return rec


class TestJsonFormatter:

    def test_basic_fields(self):
        rec = make_record(custom="value", request_id="req-1")

        data = json.loads(JsonFormatter(env="testing", service="svc").format(rec))

        assert data["message"] == "hello tester"
        assert data["level"] == "INFO"
        assert data["logger"] == "app.services"
        assert data["service"] == "svc"
        assert data["env"] == "testing"
        assert data["request_id"] == "req-1"
        assert data["custom"] == "value"
        assert "timestamp" in data
        assert "version" in data

    def test_record_internals_are_not_duplicated(self):
        data = json.loads(JsonFormatter().format(make_record()))

        for internal in ("args", "msg", "levelname", "created", "msecs"):
            assert internal not in data

    def test_non_serializable_extra_is_stringified(self):
        class Opaque:
            def __str__(self):
                return "<opaque>"

        data = json.loads(JsonFormatter().format(make_record(obj=Opaque())))

        assert data["obj"] == "<opaque>"

    def test_exception_info(self):
        try:
            raise ValueError("boom")
        except ValueError:
            rec = logging.LogRecord("app", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())

        data = json.loads(JsonFormatter().format(rec))

        assert "ValueError: boom" in data["exc_info"]


class TestColorFormatter:

    def test_colors_level_and_includes_request_id(self):
        line = ColorFormatter().format(make_record(request_id="req-9"))

        assert ColorFormatter.COLOR_CODES["INFO"] in line
        assert "req-9" in line
        assert line.endswith("hello tester")
