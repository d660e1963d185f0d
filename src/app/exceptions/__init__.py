# app/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # Domain errors (NotFoundError, DuplicateError, MissingFieldError, ValidationError)
# │   ├── integrity_classifier.py    # SQL-level / DB-specific error classification
# │   └── mapper.py                  # Map IntegrityError to DuplicateError via the constraint registry

from .base import (
    DomainError,
    NotFoundError,
    DuplicateError,
    MissingFieldError,
    ValidationError,
)

__all__ = [
    "DomainError",
    "NotFoundError",
    "DuplicateError",
    "MissingFieldError",
    "ValidationError",
]
