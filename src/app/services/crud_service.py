"""
Generic CRUD engine shared by the POS, User and Review services.

`CrudService` works on immutable domain values. It talks to a repository (the storage
port) and an `EntityMapper`, and it owns the translation of unique-constraint
violations into `DuplicateError`:

    crud = CrudService(PosRepository(db), pos_mapper, "Pos")
    pos = await crud.upsert(Pos(name="Cafe Botanik", ...))   # insert, id assigned
    pos = await crud.upsert(replace(pos, description="..."))  # update by id

Services hold an engine instance (`self.crud`) rather than inheriting from it;
`CrudOperations` forwards the generic operations so every service exposes the same
surface.
"""

import logging
from typing import Generic, TypeVar

from app.database.base import Base
from app.exceptions.base import NotFoundError
from app.exceptions.mapper import db_error_handler
from app.mappers.entity_mapper import EntityMapper
from app.repositories.base_repository import BaseRepository
from app.repositories.constraint_registry import UniqueConstraintRegistry, constraint_registry

DomainT = TypeVar("DomainT")
EntityT = TypeVar("EntityT", bound=Base)

logger = logging.getLogger(__name__)


class CrudService(Generic[DomainT, EntityT]):
    """
    Create, read, update and delete domain values of one type.

    Args:
        repository: storage port for the entity type
        mapper: converts between the domain value and the ORM entity
        entity_name: name used in error messages ("Pos", "User", ...)
        registry: source of the unique-field constraints of the entity type
    """

    def __init__(
        self,
        repository: BaseRepository[EntityT],
        mapper: EntityMapper[DomainT, EntityT],
        entity_name: str,
        registry: UniqueConstraintRegistry = constraint_registry,
    ):
        self.repository = repository
        self.mapper = mapper
        self.entity_name = entity_name
        self.registry = registry

    @property
    def db(self):
        return self.repository.db

    async def get_all(self) -> list[DomainT]:
        entities = await self.repository.get_all()
        return [self.mapper.to_domain(entity) for entity in entities]

    async def get_by_id(self, entity_id: int) -> DomainT:
        return self.mapper.to_domain(await self._load(entity_id))

    async def get_by_field(self, field: str, value) -> DomainT:
        """
        Look up a value by a unique field.

        Raises:
            NotFoundError: "<Entity> with <field> '<value>' does not exist."
        """
        entity = await self.repository.find_by_field(field, value)
        if entity is None:
            raise NotFoundError(self.entity_name, field=field, value=value)
        return self.mapper.to_domain(entity)

    async def upsert(self, domain: DomainT) -> DomainT:
        """
        Insert `domain` if it has no id, otherwise update the stored value with that id.

        On update every caller-owned field is copied onto the stored entity; id and
        timestamps stay as stored. A write that hits a known unique constraint raises
        `DuplicateError`; any other storage failure propagates unchanged.

        Raises:
            NotFoundError: the id is set but nothing is stored under it
            DuplicateError: a unique domain field already has this value
        """
        domain_id = getattr(domain, "id", None)
        constraints = self.registry.constraints_for(self.repository.model)

        if domain_id is None:
            entity = self.mapper.to_entity(domain)
            async with db_error_handler(self.db, self.entity_name, constraints, domain):
                entity = await self.repository.add(entity)
            logger.info("crud.created", extra={"model": self.entity_name, "id": entity.id})
        else:
            entity = await self._load(domain_id)
            async with db_error_handler(self.db, self.entity_name, constraints, domain):
                self.mapper.update_entity(domain, entity)
                entity = await self.repository.save(entity)
            logger.info("crud.updated", extra={"model": self.entity_name, "id": entity.id})

        return self.mapper.to_domain(entity)

    async def delete(self, entity_id: int) -> None:
        entity = await self._load(entity_id)
        await self.repository.delete(entity)
        logger.info("crud.deleted", extra={"model": self.entity_name, "id": entity_id})

    async def clear(self) -> None:
        """
        Delete every stored value and restart id generation.

        Administrative/test reset only; nothing outside the process calls this.
        """
        rows = await self.repository.delete_all()
        await self.repository.reset_sequence()
        logger.warning("crud.cleared", extra={"model": self.entity_name, "rows": rows})

    async def _load(self, entity_id: int) -> EntityT:
        entity = await self.repository.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(self.entity_name, entity_id)
        return entity


class CrudOperations(Generic[DomainT]):
    """Forwards the generic operations to `self.crud`."""

    crud: CrudService

    async def get_all(self) -> list[DomainT]:
        return await self.crud.get_all()

    async def get_by_id(self, entity_id: int) -> DomainT:
        return await self.crud.get_by_id(entity_id)

    async def upsert(self, domain: DomainT) -> DomainT:
        return await self.crud.upsert(domain)

    async def delete(self, entity_id: int) -> None:
        await self.crud.delete(entity_id)

    async def clear(self) -> None:
        await self.crud.clear()
