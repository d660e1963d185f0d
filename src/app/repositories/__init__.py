"""
Repository layer initialization module.

The repositories are the storage port of the services: they read and write ORM entities
through an `AsyncSession` and never commit. The unique-constraint registry describes which
columns of a model carry a unique constraint a domain field maps to.

Usage:
    from app.repositories import PosRepository, UserRepository, ReviewRepository
"""

from .base_repository import BaseRepository
from .constraint_registry import UniqueConstraintRegistry, UniqueFieldConstraint, constraint_registry
from .pos_repository import PosRepository
from .review_repository import ReviewRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "PosRepository",
    "ReviewRepository",
    "UserRepository",
    "UniqueConstraintRegistry",
    "UniqueFieldConstraint",
    "constraint_registry",
]
