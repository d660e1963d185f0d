"""
Conversion between ORM entities and immutable domain values.

One generic mapper covers all entity types: the domain dataclass declares the fields,
the ORM model has columns of the same names. `id`, `created_at` and `updated_at` are
read from the entity but never written to it; the database and the column defaults own
them.
"""

import dataclasses
from typing import Any, Generic, TypeVar

from app.database.base import Base
from app.domain.objects import Pos, Review, User
from app.models import PosEntity, ReviewEntity, UserEntity

DomainT = TypeVar("DomainT")
EntityT = TypeVar("EntityT", bound=Base)

BOUNDARY_FIELDS = ("id", "created_at", "updated_at")


class EntityMapper(Generic[DomainT, EntityT]):

    def __init__(self, domain_type: type[DomainT], entity_type: type[EntityT]):
        self.domain_type = domain_type
        self.entity_type = entity_type
        self.fields = tuple(
            f.name for f in dataclasses.fields(domain_type) if f.name not in BOUNDARY_FIELDS
        )

    def to_domain(self, entity: EntityT) -> DomainT:
        values: dict[str, Any] = {name: getattr(entity, name) for name in BOUNDARY_FIELDS}
        values.update({name: getattr(entity, name) for name in self.fields})
        return self.domain_type(**values)

    def to_entity(self, domain: DomainT) -> EntityT:
        return self.entity_type(**{name: getattr(domain, name) for name in self.fields})

    def update_entity(self, domain: DomainT, entity: EntityT) -> None:
        """Copy every caller-owned field onto an existing entity, leaving id and timestamps alone."""
        for name in self.fields:
            setattr(entity, name, getattr(domain, name))


pos_mapper: EntityMapper[Pos, PosEntity] = EntityMapper(Pos, PosEntity)
user_mapper: EntityMapper[User, UserEntity] = EntityMapper(User, UserEntity)
review_mapper: EntityMapper[Review, ReviewEntity] = EntityMapper(Review, ReviewEntity)
