# src/app/core/logging/
# ├─ builder.py      make_dict_config(settings) + setup_logging(settings)
# ├─ formatters.py   JsonFormatter, ColorFormatter
# ├─ filters.py      RequestIdFilter, RedactFilter (+ contextvar helpers)
# ├─ handlers.py     handler factories for dictConfig
# └─ middleware.py   Starlette middleware that sets the request id

from .builder import setup_logging, make_dict_config, stop_queue_logging
from .filters import set_request_id, reset_request_id, get_request_id, RequestIdFilter, RedactFilter
from .middleware import RequestIDMiddleware

__all__ = [
    "setup_logging",
    "make_dict_config",
    "stop_queue_logging",
    "set_request_id",
    "reset_request_id",
    "get_request_id",
    "RequestIdFilter",
    "RedactFilter",
    "RequestIDMiddleware",
]
