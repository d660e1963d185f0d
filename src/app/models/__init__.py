r"""
Centralized access to all database models of the campus coffee service.

Importing this package registers every model with `Base.metadata`, which both
`create_all` and the unique-constraint registry rely on.

    from app.models import PosEntity, UserEntity, ReviewEntity
"""

from .pos import PosEntity
from .user import UserEntity
from .review import ReviewEntity

__all__ = [
    "PosEntity",
    "UserEntity",
    "ReviewEntity",
]
