"""
Base repository class providing common database operations.

This is the storage port the CRUD engine talks to. It works on ORM entities and an
`AsyncSession`; it knows nothing about domain values or domain errors. Reads return
`None` / empty lists for "no match", writes `flush()` but never `commit()`; the
transaction belongs to the caller (the request-scoped session dependency).

Storage failures are not wrapped here. An `IntegrityError` has to reach the CRUD engine
unchanged so it can be matched against the unique-constraint registry, and any other
failure propagates as-is.

Model-specific repositories inherit from this class and add their own finders.
"""

import time
from typing import TypeVar, Generic, Type, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import Sequence, select, delete, text
import logging

from app.database.base import Base

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

# Setup logging
logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize the repository.

        Args:
            model: The SQLAlchemy model class (e.g. PosEntity, not PosEntity())
            db: The async database session, usually injected per request
        """
        self.model = model
        self.db = db

    # =================================================================================================================
    # Write Operations
    # =================================================================================================================

    async def add(self, entity: ModelType) -> ModelType:
        """
        Insert a new entity.

        `flush()` sends the INSERT so the database assigns the id and the column defaults
        fill the timestamps; `refresh()` loads them back onto the instance.
        """
        start = time.perf_counter()
        self.db.add(entity)
        await self.db.flush()
        await self.db.refresh(entity)

        logger.info(
            "repo.add.success",
            extra={
                "model": self.model.__name__,
                "operation": "add",
                "id": getattr(entity, "id", None),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    async def save(self, entity: ModelType) -> ModelType:
        """
        Persist pending changes of an already loaded entity (UPDATE).
        """
        await self.db.flush()
        await self.db.refresh(entity)
        logger.debug(f"Updated {self.model.__name__} with ID: {entity.id}")
        return entity

    async def delete(self, entity: ModelType) -> None:
        await self.db.delete(entity)
        await self.db.flush()
        logger.debug(f"Deleted {self.model.__name__} with ID: {entity.id}")

    async def delete_all(self) -> int:
        """
        Bulk-delete every row of the table. Returns the number of deleted rows.
        """
        result = await self.db.execute(delete(self.model))
        # bulk DELETE bypasses the identity map; drop stale instances
        self.db.expunge_all()
        logger.info(
            "repo.delete_all.success",
            extra={"model": self.model.__name__, "operation": "delete_all", "rows": result.rowcount},
        )
        return result.rowcount

    async def reset_sequence(self) -> None:
        """
        Restart the id sequence of the table at 1.

        Only PostgreSQL has real sequences (`<table>_seq`). SQLite hands out
        max(rowid) + 1, which is already 1 once the table is empty.
        """
        dialect = self.db.get_bind().dialect.name
        id_default = self.model.__table__.c.id.default

        if dialect != "postgresql" or not isinstance(id_default, Sequence):
            logger.debug(f"No sequence to reset for {self.model.__name__} on {dialect}")
            return

        await self.db.execute(text(f"ALTER SEQUENCE {id_default.name} RESTART WITH 1"))
        logger.info(
            "repo.reset_sequence.success",
            extra={"model": self.model.__name__, "sequence": id_default.name},
        )

    # =================================================================================================================
    # Read Operations
    # =================================================================================================================

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        """
        Get an entity by its ID.

        Returns:
            The entity if found, otherwise None
        """
        # Example: SELECT * FROM pos WHERE id = :entity_id
        result = await self.db.execute(
            select(self.model).where(self.model.id == entity_id)
        )
        entity = result.scalar_one_or_none()
        logger.debug(f"Retrieved {self.model.__name__} by ID: {entity_id} (found: {entity is not None})")
        return entity

    async def find_by_field(self, field: str, value: Any) -> ModelType | None:
        """
        Find a single entity by a (unique) field.

        Raises:
            AttributeError: If the field does not exist on the model
        """
        if not hasattr(self.model, field):
            raise AttributeError(f"{self.model.__name__} has no field '{field}'")

        result = await self.db.execute(
            select(self.model).where(getattr(self.model, field) == value)
        )
        entity = result.scalar_one_or_none()
        logger.debug(f"Lookup {self.model.__name__} by {field}={value!r} (found: {entity is not None})")
        return entity

    async def find_all_by(self, **filters: Any) -> list[ModelType]:
        """
        Find all entities whose fields equal the given values, ordered by id.

            await repo.find_all_by(pos_id=1, approved=True)
        """
        query = select(self.model)
        for field, value in filters.items():
            if not hasattr(self.model, field):
                raise AttributeError(f"{self.model.__name__} has no field '{field}'")
            query = query.where(getattr(self.model, field) == value)

        result = await self.db.execute(query.order_by(self.model.id))
        entities = list(result.scalars().all())
        logger.debug(f"Retrieved {len(entities)} {self.model.__name__} entities for filters {sorted(filters)}")
        return entities

    async def get_all(self) -> list[ModelType]:
        """
        Get all entities ordered by id (stable, so repeated reads compare equal).
        """
        result = await self.db.execute(select(self.model).order_by(self.model.id))
        entities = list(result.scalars().all())
        logger.debug(f"Retrieved {len(entities)} {self.model.__name__} entities")
        return entities
