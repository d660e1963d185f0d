"""
Review repository.

Both finders filter on `pos_id` first, which is indexed.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.models.review import ReviewEntity
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ReviewRepository(BaseRepository[ReviewEntity]):

    def __init__(self, db: AsyncSession):
        super().__init__(ReviewEntity, db)

    async def find_by_pos_and_author(self, pos_id: int, author_id: int) -> list[ReviewEntity]:
        """
        All reviews a user wrote for a POS.

        Normally zero or one; a list keeps the caller honest if the business rule was
        ever bypassed (e.g. rows inserted directly).
        """
        result = await self.db.execute(
            select(ReviewEntity)
            .where(ReviewEntity.pos_id == pos_id, ReviewEntity.author_id == author_id)
            .order_by(ReviewEntity.id)
        )
        return list(result.scalars().all())

    async def find_by_pos_and_approved(self, pos_id: int, approved: bool) -> list[ReviewEntity]:
        reviews = await self.find_all_by(pos_id=pos_id, approved=approved)
        logger.debug(
            "repo.reviews.filter",
            extra={"pos_id": pos_id, "approved": approved, "rows": len(reviews)},
        )
        return reviews
