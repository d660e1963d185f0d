# src/app/tests/test_logging/test_builder.py
import logging
import time
from logging.handlers import QueueHandler
from pathlib import Path

from app.core.logging.builder import (
    is_queue_logging_active,
    make_dict_config,
    setup_logging,
    stop_queue_logging,
)
from app.core.logging.filters import reset_request_id, set_request_id


class TestMakeDictConfig:

    def test_file_handlers_when_not_logging_to_stdout(self, log_settings):
        cfg = make_dict_config(log_settings())

        assert set(cfg["handlers"]) == {"console", "file", "error_file"}
        assert cfg["handlers"]["file"]["filename"].endswith("app.log")
        assert cfg["handlers"]["error_file"]["level"] == "ERROR"
        assert cfg["loggers"][""]["handlers"] == ["console", "file", "error_file"]

    def test_error_console_when_logging_to_stdout(self, log_settings):
        cfg = make_dict_config(log_settings(LOG_TO_STDOUT=True))

        assert set(cfg["handlers"]) == {"console", "error_console"}

    def test_text_format_uses_standard_formatter(self, log_settings):
        cfg = make_dict_config(log_settings(LOG_FORMAT="text", LOG_TO_STDOUT=True))

        assert cfg["handlers"]["console"]["formatter"] == "standard"
        # error output stays structured
        assert cfg["handlers"]["error_console"]["formatter"] == "json"

    def test_json_formatter_carries_project_name(self, log_settings):
        cfg = make_dict_config(log_settings())

        assert cfg["formatters"]["json"]["service"] == "campus-coffee"
        assert cfg["formatters"]["json"]["env"] == "testing"

    def test_sql_logging_toggle(self, log_settings):
        assert make_dict_config(log_settings())["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"
        assert make_dict_config(log_settings(ENABLE_SQL_LOGGING=True))["loggers"]["sqlalchemy.engine"]["level"] == "DEBUG"


class TestSetupLogging:

    def test_creates_log_dir(self, log_settings):
        settings = log_settings()
        assert not Path(settings.LOG_DIR).exists()

        setup_logging(settings)

        assert Path(settings.LOG_DIR).exists()
        assert logging.getLogger().handlers

    def test_queue_mode_writes_through_listener(self, log_settings):
        """
        Behavior:
            - With LOG_USE_QUEUE the root logger only holds a QueueHandler.
            - Records reach app.log once the listener is stopped (flushed), carrying the
              request id of the producing context and their extras.
        """
        settings = log_settings(LOG_USE_QUEUE=True)
        setup_logging(settings)

        root = logging.getLogger()
        assert is_queue_logging_active()
        assert all(isinstance(h, QueueHandler) for h in root.handlers)

        token = set_request_id("queue-req-1")
        try:
            for i in range(5):
                logging.getLogger("test.queue").info("queued message %d", i, extra={"iteration": i})
        finally:
            reset_request_id(token)

        time.sleep(0.05)
        stop_queue_logging()
        assert not is_queue_logging_active()

        text = (Path(settings.LOG_DIR) / "app.log").read_text()
        assert "queued message 0" in text
        assert "queued message 4" in text
        assert '"iteration"' in text
        assert "queue-req-1" in text
