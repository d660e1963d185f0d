import logging
from contextlib import asynccontextmanager
from typing import Any, Iterable, NoReturn, TYPE_CHECKING

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import classify_integrity_error
from .base import DuplicateError

if TYPE_CHECKING:
    from app.repositories.constraint_registry import UniqueFieldConstraint

logger = logging.getLogger(__name__)


# -----------------------
# Mapper
# -----------------------

def raise_mapped_integrity_error(
    exc: IntegrityError,
    entity_name: str,
    constraints: Iterable["UniqueFieldConstraint"],
    domain_value: Any,
) -> NoReturn:
    """
    Map a SQLAlchemy IntegrityError to a DuplicateError and raise it.

    The first known unique-field constraint the failure refers to wins; its value is read
    from the domain value being written. If no known constraint matches, the original
    IntegrityError is re-raised unchanged.
    """
    diagnostic = classify_integrity_error(exc)

    for constraint in constraints:
        if constraint.matches(diagnostic):
            value = constraint.extract_value(domain_value)
            # INFO: duplicates are expected client-level scenarios (409)
            logger.info(
                "mapper.duplicate_detected",
                extra={
                    "model": entity_name,
                    "field": constraint.field_name,
                    "constraint": constraint.constraint_name,
                },
            )
            raise DuplicateError(
                entity_name, constraint.field_name, value, constraint=constraint.constraint_name
            ) from exc

    logger.warning(
        "mapper.unmapped_integrity_error",
        extra={
            "model": entity_name,
            "kind": diagnostic.kind.__name__,
            "constraint": diagnostic.constraint_name,
        },
    )
    raise exc


# -----------------------
# Async context manager to DRY error handling in the CRUD engine
# -----------------------
@asynccontextmanager
async def db_error_handler(
    db: AsyncSession,
    entity_name: str,
    constraints: Iterable["UniqueFieldConstraint"],
    domain_value: Any,
):
    """
    Usage:
        async with db_error_handler(self.db, "Pos", constraints, pos):
            ... flush that may raise IntegrityError ...

    The block runs inside a SAVEPOINT, so a failed write only rolls back itself and the
    session stays usable for the rest of the request.
    """
    try:
        async with db.begin_nested():
            yield
    except IntegrityError as exc:
        raise_mapped_integrity_error(exc, entity_name, constraints, domain_value)
