"""
Unique-constraint registry.

Knows, per ORM model, which columns are unique *and* map to a domain field, and which
database constraint protects each of them. The CRUD engine uses this to turn an
`IntegrityError` into a `DuplicateError` naming the offending field and value.

A column takes part when it is declared like this:

    name: Mapped[str] = mapped_column(String(255), unique=True, info={"domain_field": "name"})

Constraint names come from the table metadata, keyed by (table, column): an explicit
single-column `UniqueConstraint` or unique `Index`, or else the `uq` naming convention
of `Base.metadata`. Columns whose constraint cannot be resolved are skipped with a
warning. Both lookups are cached; the caches derive from static schema shape only, so
one registry can be shared by all sessions.
"""

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import Index, Table, UniqueConstraint
from sqlalchemy import inspect as sa_inspect

from app.exceptions.integrity_classifier import IntegrityDiagnostic

logger = logging.getLogger(__name__)

DOMAIN_FIELD_KEY = "domain_field"


@dataclass(frozen=True)
class UniqueFieldConstraint:
    """One unique domain field: where it lives in storage and how to read it from a domain value."""
    field_name: str
    table_name: str
    column_name: str
    constraint_name: str

    @property
    def qualified_column(self) -> str:
        return f"{self.table_name}.{self.column_name}"

    def extract_value(self, domain_value: Any) -> Any:
        return getattr(domain_value, self.field_name)

    def matches(self, diagnostic: IntegrityDiagnostic) -> bool:
        """
        True if the integrity failure was raised by this constraint.

        Postgres names the constraint in its diagnostics and message; SQLite only names
        the 'table.column' pair, so both are checked.
        """
        if diagnostic.mentions(self.constraint_name):
            return True
        return self.qualified_column in diagnostic.qualified_columns


def _is_str_name(name: Any) -> bool:
    # Unnamed constraints carry None or SQLAlchemy's NONE_NAME symbol (an int), not a str.
    return isinstance(name, str) and bool(name)


def _render_naming_convention(table: Table, column_name: str) -> str | None:
    template = table.metadata.naming_convention.get("uq")
    if not isinstance(template, str):
        return None
    try:
        return template % {"table_name": table.name, "column_0_name": column_name}
    except (KeyError, TypeError, ValueError):
        logger.debug("registry.naming_convention.unrenderable",
                     extra={"table": table.name, "column": column_name, "template": template})
        return None


class UniqueConstraintRegistry:
    """
    Caches unique-field constraints per model and constraint names per 'table.column'.

    `None` results of name resolution are cached as well, so an unresolvable column is
    inspected (and warned about) only once.
    """

    def __init__(self) -> None:
        self._model_cache: dict[type, tuple[UniqueFieldConstraint, ...]] = {}
        self._constraint_name_cache: dict[str, str | None] = {}

    def constraints_for(self, model: type) -> tuple[UniqueFieldConstraint, ...]:
        cached = self._model_cache.get(model)
        if cached is not None:
            return cached

        table: Table = sa_inspect(model).local_table
        logger.debug("registry.extract.start", extra={"model": model.__name__, "table": table.name})

        constraints = []
        for column in table.columns:
            if not column.unique or DOMAIN_FIELD_KEY not in column.info:
                continue
            constraint = self._build_constraint(table, column)
            if constraint is not None:
                constraints.append(constraint)

        result = tuple(constraints)
        logger.info(
            "registry.extract.done",
            extra={
                "model": model.__name__,
                "count": len(result),
                "columns": [c.column_name for c in result],
            },
        )
        self._model_cache[model] = result
        return result

    def _build_constraint(self, table: Table, column) -> UniqueFieldConstraint | None:
        try:
            constraint_name = self.resolve_constraint_name(table, column.name)
            if constraint_name is None:
                logger.warning(
                    f"Could not resolve constraint name for {table.name}.{column.name}, skipping field"
                )
                return None
            return UniqueFieldConstraint(
                field_name=column.info[DOMAIN_FIELD_KEY],
                table_name=table.name,
                column_name=column.name,
                constraint_name=constraint_name,
            )
        except Exception:
            logger.exception(
                "registry.extract.field_failed",
                extra={"table": table.name, "column": column.name},
            )
            return None

    def resolve_constraint_name(self, table: Table, column_name: str) -> str | None:
        cache_key = f"{table.name}.{column_name}"
        if cache_key in self._constraint_name_cache:
            return self._constraint_name_cache[cache_key]

        name = self._lookup_constraint_name(table, column_name)
        if name is not None:
            logger.debug(f"Found constraint '{name}' for {cache_key}")
        self._constraint_name_cache[cache_key] = name
        return name

    @staticmethod
    def _lookup_constraint_name(table: Table, column_name: str) -> str | None:
        # explicit single-column unique constraints / indexes first
        candidates: list[UniqueConstraint | Index] = [
            c for c in table.constraints if isinstance(c, UniqueConstraint)
        ]
        candidates.extend(idx for idx in table.indexes if idx.unique)

        matching = [c for c in candidates if [col.name for col in c.columns] == [column_name]]

        # table.constraints is a set; an explicit name beats the one unique=True adds
        for candidate in matching:
            if _is_str_name(candidate.name):
                return str(candidate.name)

        column = table.columns.get(column_name)
        if matching or (column is not None and column.unique):
            # unnamed: the DDL gets its name from the metadata naming convention
            return _render_naming_convention(table, column_name)
        return None


# Shared instance; constraint metadata is static for the lifetime of the process.
constraint_registry = UniqueConstraintRegistry()
