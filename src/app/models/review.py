from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Sequence, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import datetime
from app.database.base import Base, utc_now
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .pos import PosEntity
    from .user import UserEntity


# ------------------------------
# Review Model
# ------------------------------
class ReviewEntity(Base):
    """
    SQLAlchemy model representing a review of a POS written by a user.

    The one-review-per-(POS, author) rule is a business rule enforced by the review
    service (it reports a validation error, not a duplicate), so there is no unique
    constraint on (pos_id, author_id).
    """
    __tablename__ = "reviews"

    id: Mapped[int] = mapped_column(
        Integer,
        Sequence("reviews_seq", start=1),
        primary_key=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False
    )

    # Foreign key reference to the reviewed POS
    pos_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("pos.id", ondelete="CASCADE"),
        nullable=False,
        index=True  # filter(pos, approved) and filter(pos, author) both start here
    )

    # Foreign key reference to the author
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    review: Mapped[str] = mapped_column(Text, nullable=False)

    approval_count: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False
    )

    approved: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False
    )

    # --- Relationships ---

    pos: Mapped["PosEntity"] = relationship(
        "PosEntity",
        back_populates="reviews"
    )

    author: Mapped["UserEntity"] = relationship(
        "UserEntity",
        back_populates="reviews"
    )

    def __repr__(self) -> str:
        return (
            f"<ReviewEntity(id={self.id!r}, pos_id={self.pos_id!r}, "
            f"author_id={self.author_id!r}, approval_count={self.approval_count!r})>"
        )
