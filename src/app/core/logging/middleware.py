# src/app/core/logging/middleware.py
"""
Request ID middleware for FastAPI / Starlette.

Each request gets an id: the incoming `X-Request-ID` header when it is a well-formed
token, otherwise a fresh UUID4. The id is stored in the request-id contextvar for the
duration of the request (so `RequestIdFilter` stamps it on every log record) and echoed
in the `X-Request-ID` response header.

    app.add_middleware(RequestIDMiddleware)
"""

import re
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .filters import set_request_id, reset_request_id

REQUEST_ID_HEADER = "X-Request-ID"

# Bounded, printable token; anything else would end up verbatim in the logs.
_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._:\-]{1,128}")


def resolve_request_id(incoming: str | None) -> str:
    if incoming and _VALID_REQUEST_ID.fullmatch(incoming):
        return incoming
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = set_request_id(rid)
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            reset_request_id(token)
