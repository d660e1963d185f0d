"""
Review service: one review per (POS, author) and quorum-based approval.

A review is approved once `approval_count` reaches the configured minimum. The counter
only moves through `approve`, which always starts from the stored value; whatever
counter or flag a caller puts into a review it hands in is ignored.
"""

import dataclasses
import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from app.config.settings import Settings
from app.domain.objects import Review
from app.exceptions.base import NotFoundError, ValidationError
from app.mappers.entity_mapper import review_mapper
from app.repositories.review_repository import ReviewRepository
from .crud_service import CrudOperations, CrudService
from .pos_service import PosService
from .user_service import UserService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApprovalConfiguration:
    min_count: int

    def __post_init__(self) -> None:
        if self.min_count < 1:
            raise ValueError(f"Minimum approval count must be at least 1, got {self.min_count}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "ApprovalConfiguration":
        return cls(min_count=settings.APPROVAL_MIN_COUNT)


class ReviewService(CrudOperations[Review]):

    def __init__(
        self,
        db: AsyncSession,
        approval: ApprovalConfiguration,
        pos_service: PosService | None = None,
        user_service: UserService | None = None,
    ):
        self.repository = ReviewRepository(db)
        self.crud = CrudService(self.repository, review_mapper, "Review")
        self.approval = approval
        self.pos_service = pos_service or PosService(db)
        self.user_service = user_service or UserService(db)

    async def upsert(self, review: Review) -> Review:
        """
        Create or update a review.

        Raises:
            NotFoundError: the POS, the author or (on update) the review does not exist
            ValidationError: the author already reviewed this POS
        """
        pos = await self.pos_service.get_by_id(review.pos_id)
        author = await self.user_service.get_by_id(review.author_id)

        existing = await self.repository.find_by_pos_and_author(review.pos_id, review.author_id)
        if any(entity.id != review.id for entity in existing):
            logger.info(
                "review.duplicate_author",
                extra={"pos_id": pos.id, "author_id": author.id},
            )
            raise ValidationError(
                f"User '{author.login_name}' has already reviewed POS '{pos.name}'.",
                fields=["author_id", "pos_id"],
            )

        if review.id is None:
            approval_count = 0
        else:
            approval_count = (await self.crud.get_by_id(review.id)).approval_count

        review = self.update_approval_status(dataclasses.replace(review, approval_count=approval_count))
        return await self.crud.upsert(review)

    async def filter(self, pos_id: int, approved: bool) -> list[Review]:
        """All reviews of a POS with the given approval status."""
        await self.pos_service.get_by_id(pos_id)
        entities = await self.repository.find_by_pos_and_approved(pos_id, approved)
        return [review_mapper.to_domain(entity) for entity in entities]

    async def approve(self, review: Review, user_id: int) -> Review:
        """
        Count one approval of `review` by user `user_id`.

        Only `review.id` is used; counter and author are taken from the stored review.

        Raises:
            NotFoundError: the user or the review does not exist
            ValidationError: the user wrote the review
        """
        approver = await self.user_service.get_by_id(user_id)
        if review.id is None:
            raise NotFoundError("Review", None)
        stored = await self.crud.get_by_id(review.id)

        if stored.author_id == approver.id:
            logger.info("review.self_approval_rejected", extra={"review_id": stored.id, "user_id": approver.id})
            raise ValidationError("Users cannot approve their own reviews.", fields=["user_id"])

        approved = self.update_approval_status(
            dataclasses.replace(stored, approval_count=stored.approval_count + 1)
        )
        quorum = f"({approved.approval_count}/{self.approval.min_count})"
        if approved.approved:
            logger.info(f"Review {stored.id} reached the approval quorum {quorum}")
        else:
            logger.info(f"Review {stored.id} has not reached the approval quorum yet {quorum}")

        return await self.crud.upsert(approved)

    def update_approval_status(self, review: Review) -> Review:
        """Derive `approved` from the counter: true iff approval_count >= min_count."""
        return dataclasses.replace(review, approved=review.approval_count >= self.approval.min_count)
