import logging
import re
from dataclasses import dataclass
from enum import Enum
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)

# =================================================================================================================
# Constraint-specific exceptions
# =================================================================================================================
# Internal classification tags only. They are never raised to callers; the mapper decides
# which domain error (if any) an integrity failure becomes.


class ConstraintViolationError(Exception):
    """Base for integrity/constraint violations."""


class UniqueConstraintError(ConstraintViolationError):
    """Unique constraint / duplicate value."""


class NotNullConstraintError(ConstraintViolationError):
    """NOT NULL violation (missing required field)."""


class ForeignKeyConstraintError(ConstraintViolationError):
    """Foreign key constraint violated."""


class CheckConstraintError(ConstraintViolationError):
    """CHECK constraint violated."""


class UnknownIntegrityError(ConstraintViolationError):
    """Unrecognized integrity error."""


# =================================================================================================================
# Postgres error code mapping
# =================================================================================================================

# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"


# keyed by the plain SQLSTATE string the drivers report
PGCODE_EXCEPTION_MAP: dict[str, type[ConstraintViolationError]] = {
    PostgresErrorCodes.UNIQUE_VIOLATION.value: UniqueConstraintError,
    PostgresErrorCodes.NOT_NULL_VIOLATION.value: NotNullConstraintError,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION.value: ForeignKeyConstraintError,
    PostgresErrorCodes.CHECK_VIOLATION.value: CheckConstraintError,
}


@dataclass(frozen=True)
class IntegrityDiagnostic:
    """
    What could be learned about an IntegrityError.

    - kind: one of the ConstraintViolationError subclasses above
    - constraint_name: driver-reported constraint name (Postgres diag), if any
    - messages: texts to search for constraint identifiers (the wrapper text and the DBAPI cause)
    - qualified_columns: 'table.column' names reported by SQLite ("UNIQUE constraint failed: pos.name")
    """
    kind: type[ConstraintViolationError]
    constraint_name: str | None
    messages: tuple[str, ...]
    qualified_columns: tuple[str, ...] = ()

    def mentions(self, identifier: str) -> bool:
        """True if the driver diagnostic or any message text refers to `identifier`."""
        if not identifier:
            return False
        if self.constraint_name == identifier:
            return True
        return any(identifier in message for message in self.messages)


# =================================================================================================================
# Integrity Error Classifiers
# =================================================================================================================

def _match_any(msg: str, keywords: list[str]) -> bool:
    return any(keyword in msg for keyword in keywords)


def _classify_from_postgres_diag(orig) -> tuple[type[ConstraintViolationError] | None, str | None]:
    """
    Classify Postgres integrity error based on pgcode (psycopg: `sqlstate`) and diagnostics.
    """
    pgcode = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if not pgcode:
        return None, None

    diag = getattr(orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None) if diag else None

    exception_class = PGCODE_EXCEPTION_MAP.get(pgcode)
    if exception_class:
        logger.debug("Postgres integrity diagnostic",
                     extra={"pgcode": pgcode, "constraint_name": constraint_name})
        return exception_class, constraint_name

    logger.warning(
        "Unknown Postgres integrity error code encountered",
        extra={"pgcode": pgcode, "constraint_name": constraint_name},
    )
    return UnknownIntegrityError, constraint_name


def _classify_from_generic_message(msg: str) -> type[ConstraintViolationError]:
    """
    Classify integrity error based on message content (fallback for SQLite, MySQL, etc).
    """
    normalized = msg.lower()

    if _match_any(normalized, ["unique constraint", "unique failed", "unique violation", "duplicate"]):
        return UniqueConstraintError

    if _match_any(normalized, ["not null constraint", "not null", "null value in column"]):
        return NotNullConstraintError

    if _match_any(normalized, ["foreign key constraint", "foreign key", "is not present in table"]):
        return ForeignKeyConstraintError

    if _match_any(normalized, ["check constraint", "check failed"]):
        return CheckConstraintError

    logger.warning("Unknown integrity error message encountered", extra={"message_snippet": (msg or "")[:200]})
    return UnknownIntegrityError


def _extract_sqlite_qualified_columns(msg: str) -> tuple[str, ...]:
    # SQLite: 'UNIQUE constraint failed: users.login_name' (several columns are comma separated)
    m = re.search(r"UNIQUE constraint failed: (?P<cols>[^\n]+)", msg, flags=re.IGNORECASE)
    if not m:
        return ()
    return tuple(c.strip() for c in re.split(r",\s*", m.group("cols")) if c.strip())


def classify_integrity_error(exc: IntegrityError) -> IntegrityDiagnostic:
    """
    Heuristically classify a SQLAlchemy IntegrityError.

    Postgres errors are classified by SQLSTATE and carry the constraint name; everything
    else falls back to message parsing.
    """
    orig = exc.orig
    messages = tuple(m for m in (str(exc), str(orig) if orig is not None else "") if m)

    kind, constraint_name = _classify_from_postgres_diag(orig)
    if kind is None:
        kind = _classify_from_generic_message(messages[-1] if messages else "")

    qualified_columns = ()
    for message in messages:
        qualified_columns = _extract_sqlite_qualified_columns(message)
        if qualified_columns:
            break

    return IntegrityDiagnostic(
        kind=kind,
        constraint_name=constraint_name,
        messages=messages,
        qualified_columns=qualified_columns,
    )
