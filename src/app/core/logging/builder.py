# src/app/core/logging/builder.py
"""
Logging builder: build and apply the dictConfig for the service.

    setup_logging(settings)      # once, at application start
    ...
    stop_queue_logging()         # at shutdown, when LOG_USE_QUEUE is on

Handlers:
 - console always
 - file + error_file when LOG_TO_STDOUT is off and LOG_DIR is set
 - error_console otherwise

With LOG_USE_QUEUE the real handlers are moved behind a QueueListener thread and the
root logger only enqueues. The request-id and redact filters then run on the
QueueHandler, in the producing context, where the request contextvar is still set.
"""

from __future__ import annotations

from pathlib import Path
import logging
import logging.config
import queue as _queue
from typing import Optional
from logging.handlers import QueueHandler, QueueListener

from app.config.settings import Settings
from app.utils.logging import get_project_name

from .formatters import JsonFormatter, ColorFormatter
from .filters import RequestIdFilter, RedactFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)

# Running listener and its queue, so stop_queue_logging() can flush them
_QUEUE_LISTENER: Optional[QueueListener] = None
_QUEUE: Optional[_queue.Queue] = None


def _writes_files(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping for `settings`.

    Loggers configured: root, uvicorn.error, uvicorn.access, sqlalchemy.engine
    (DEBUG only with ENABLE_SQL_LOGGING) and httpx (WARNING, it logs every request at INFO).
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(),
        },
    }

    filters = {
        "request_id": {"()": RequestIdFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}
    if _writes_files(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "uvicorn.error": {
                "level": settings.LOG_LEVEL,
                "handlers": list(handlers.keys()),
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            "sqlalchemy.engine": {
                "level": "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
            "httpx": {
                "level": "WARNING",
                "propagate": True,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Apply the logging configuration and, with LOG_USE_QUEUE, switch to queue mode.

    Calling it again replaces the previous configuration (and listener).
    """
    global _QUEUE_LISTENER, _QUEUE

    stop_queue_logging()

    if _writes_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    # safety net for records emitted before any handler filter runs
    logging.getLogger().addFilter(RequestIdFilter())

    if not settings.LOG_USE_QUEUE:
        return

    root_logger = logging.getLogger()
    real_handlers = list(root_logger.handlers)
    if not real_handlers:
        return

    # detach the real handlers everywhere; only the listener thread may run them
    moved = set(real_handlers)
    for logger_obj in list(logging.Logger.manager.loggerDict.values()):
        if isinstance(logger_obj, logging.Logger):
            for h in list(logger_obj.handlers):
                if h in moved:
                    logger_obj.removeHandler(h)
    for h in real_handlers:
        root_logger.removeHandler(h)

    log_queue: _queue.Queue = _queue.Queue()
    listener = QueueListener(log_queue, *real_handlers, respect_handler_level=True)
    listener.start()

    queue_handler = QueueHandler(log_queue)
    queue_handler.addFilter(RequestIdFilter())
    queue_handler.addFilter(RedactFilter())
    root_logger.addHandler(queue_handler)

    _QUEUE_LISTENER = listener
    _QUEUE = log_queue


def stop_queue_logging() -> None:
    """Flush and stop the queue listener, if one is running."""
    global _QUEUE_LISTENER, _QUEUE
    listener = _QUEUE_LISTENER
    if listener is None:
        return

    try:
        listener.stop()
    except Exception:
        logging.getLogger(__name__).exception("Failed to stop QueueListener cleanly")
    finally:
        _QUEUE_LISTENER = None
        _QUEUE = None


def is_queue_logging_active() -> bool:
    return _QUEUE_LISTENER is not None
