"""
Domain-level exceptions for the campus coffee services.

Every error the services raise on purpose derives from `DomainError`. The API layer
maps them to HTTP responses through `http_status()`; the services never catch them.
"""

from typing import Any, Iterable


def _entity_name(entity: type | str) -> str:
    return entity if isinstance(entity, str) else entity.__name__


class DomainError(Exception):
    """
    Base exception for service errors.

    - message: human-friendly message (safe to show to clients)
    - fields: optional list of field names related to the error (e.g., ['login_name'])
    - constraint: optional DB constraint name or identifier (for logs only)
    - error_code: canonical short code (e.g., 'duplicate', 'not_found') used by clients
    """

    # Map canonical error_code -> default HTTP status.
    ERROR_CODE_TO_STATUS = {
        "not_found": 404,
        "duplicate": 409,
        "missing_field": 400,
        "validation": 400,
        # fallback: default to 400 for general domain errors
    }

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.error_code = error_code

    def __str__(self) -> str:
        return self.message

    def http_status(self) -> int:
        """
        Return the HTTP status code that should accompany this error.
        Defaults to 400 (Bad Request) when the error_code is unknown.
        """
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 400)
        return 400


class NotFoundError(DomainError):
    """
    No record matches an id or a unique field value.

        NotFoundError(Pos, 42)                               -> "Pos with ID 42 does not exist."
        NotFoundError(User, field="login_name", value="jane") -> "User with login_name 'jane' does not exist."
    """

    def __init__(self, entity: type | str, entity_id: Any = None, *,
                 field: str | None = None, value: Any = None):
        name = _entity_name(entity)
        if field is not None:
            message = f"{name} with {field} '{value}' does not exist."
        else:
            message = f"{name} with ID {entity_id} does not exist."
        super().__init__(message, fields=[field] if field else None, error_code="not_found")
        self.entity = name
        self.entity_id = entity_id
        self.field = field
        self.value = value


class DuplicateError(DomainError):
    """A write would violate a unique constraint of a known domain field."""

    def __init__(self, entity: type | str, field: str, value: Any, *, constraint: str | None = None):
        name = _entity_name(entity)
        super().__init__(
            f"{name} with {field} '{value}' already exists.",
            fields=[field],
            constraint=constraint,
            error_code="duplicate",
        )
        self.entity = name
        self.field = field
        self.value = value


class MissingFieldError(DomainError):
    """A required attribute of an externally sourced record is absent or unparsable."""

    def __init__(self, entity: type | str, entity_id: Any, field: str):
        name = _entity_name(entity)
        super().__init__(
            f"{name} with ID {entity_id} does not have the required fields. Field '{field}' is missing.",
            fields=[field],
            error_code="missing_field",
        )
        self.entity = name
        self.entity_id = entity_id
        self.field = field


class ValidationError(DomainError):
    """A business rule was violated (self-approval, second review, invalid POS value, ...)."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="validation")


__all__ = [
    "DomainError",
    "NotFoundError",
    "DuplicateError",
    "MissingFieldError",
    "ValidationError",
]
