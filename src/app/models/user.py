from sqlalchemy import String, DateTime, Integer, Sequence
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import datetime
from app.database.base import Base, utc_now
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .review import ReviewEntity

class UserEntity(Base):
    """
    SQLAlchemy model for User.

    Login name and email address are unique and both map to domain fields, so a
    duplicate of either is reported with the field name.
    """
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer,
        Sequence("users_seq", start=1),
        primary_key=True,
    )

    # Timestamp for when the user was created
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False
    )

    # Timestamp for last update (auto-updated on modification)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False
    )

    login_name: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        info={"domain_field": "login_name"},
    )

    email_address: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        info={"domain_field": "email_address"},
    )

    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)

    # --- Relationships ---

    # One-to-Many: A user can author multiple reviews
    reviews: Mapped[list["ReviewEntity"]] = relationship(
        "ReviewEntity",
        back_populates="author",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="select"
    )

    def __repr__(self) -> str:
        # Helpful for debugging/logging
        return f"<UserEntity(id={self.id!r}, login_name={self.login_name!r})>"
