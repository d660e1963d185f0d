from sqlalchemy import String, DateTime, Integer, Sequence, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import datetime
from app.database.base import Base, utc_now
from app.domain.enums import CampusType, PosType
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .review import ReviewEntity


class PosEntity(Base):
    """
    SQLAlchemy model for a point of sale.

    The address is stored inline (street, house number, postal code, city).
    """
    __tablename__ = "pos"

    # Primary key from the per-table sequence (ignored by SQLite, which uses rowids)
    id: Mapped[int] = mapped_column(
        Integer,
        Sequence("pos_seq", start=1),
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

    # Unique display name; maps to the domain field `name`
    name: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        info={"domain_field": "name"},
    )

    description: Mapped[str] = mapped_column(Text, nullable=False)

    type: Mapped[PosType] = mapped_column(
        SQLEnum(PosType, name="pos_type"),
        nullable=False
    )

    campus: Mapped[CampusType] = mapped_column(
        SQLEnum(CampusType, name="campus_type"),
        nullable=False
    )

    street: Mapped[str] = mapped_column(String(255), nullable=False)
    house_number: Mapped[str] = mapped_column(String(255), nullable=False)
    postal_code: Mapped[int] = mapped_column(Integer, nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False)

    # --- Relationships ---

    # One-to-Many: reviews are removed together with their POS
    reviews: Mapped[list["ReviewEntity"]] = relationship(
        "ReviewEntity",
        back_populates="pos",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="select"
    )

    def __repr__(self) -> str:
        return f"<PosEntity(id={self.id!r}, name={self.name!r}, campus={self.campus!r})>"
