"""
POS repository for point-of-sale lookups.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.pos import PosEntity
from .base_repository import BaseRepository


class PosRepository(BaseRepository[PosEntity]):

    def __init__(self, db: AsyncSession):
        super().__init__(PosEntity, db)

    async def find_by_name(self, name: str) -> PosEntity | None:
        return await self.find_by_field("name", name)
