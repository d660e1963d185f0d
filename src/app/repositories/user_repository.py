"""
User repository for handling user-specific database operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import UserEntity
from .base_repository import BaseRepository


class UserRepository(BaseRepository[UserEntity]):
    """
    Repository for User entity operations.

    Login names and email addresses are stored as given; no case folding happens here,
    so lookups by `login_name` are exact.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(UserEntity, db)
