from pathlib import Path
from types import SimpleNamespace

import pytest

from app.config import get_settings
from app.core.logging.builder import setup_logging, stop_queue_logging


def make_log_settings(log_dir: Path, **overrides) -> SimpleNamespace:
    """Duck-typed settings carrying only the logging fields."""
    values = {
        "ENV": "testing",
        "LOG_LEVEL": "INFO",
        "LOG_FORMAT": "json",
        "LOG_TO_STDOUT": False,
        "LOG_DIR": log_dir,
        "LOG_MAX_BYTES": 1_000_000,
        "LOG_BACKUP_COUNT": 1,
        "LOG_USE_QUEUE": False,
        "ENABLE_SQL_LOGGING": False,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.fixture
def log_settings(tmp_path):
    return lambda **overrides: make_log_settings(tmp_path / "logs", **overrides)


@pytest.fixture(autouse=True)
def restore_logging():
    """These tests reconfigure the root logger; put the session configuration back."""
    yield
    stop_queue_logging()
    setup_logging(get_settings())
