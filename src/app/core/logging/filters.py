# src/app/core/logging/filters.py
"""
Logging filters.

- RequestIdFilter: stamps `record.request_id` from a contextvar set by the HTTP
  middleware ("-" outside a request). Contextvars follow the request across `await`,
  so service and repository logs carry the id of the request that triggered them.
- RedactFilter: masks record attributes whose names are known to hold secrets.

Both filters always return True; they annotate records, they never drop them.
"""

import contextvars
import logging
from logging import LogRecord

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None) -> contextvars.Token:
    """Set the request id of the current context; pass the returned token to `reset_request_id`."""
    return _request_id_ctx.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Guarantee a `request_id` attribute on every record.

    An explicit `extra={"request_id": ...}` wins over the contextvar.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    REDACTED = "***REDACTED***"
    SENSITIVE = {
        "password", "secret", "token", "access_token", "refresh_token",
        "authorization", "postgres_password", "email_address",
    }

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.REDACTED
        return True
