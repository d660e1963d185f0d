"""
Immutable domain values.

Every value is a frozen dataclass. A "change" is `dataclasses.replace(value, ...)`, which
builds a new value and runs `__post_init__` again, so construction-time rules also hold
for every modified copy.

`id`, `created_at` and `updated_at` belong to the persistence boundary: they are `None`
until the value has been stored, and the CRUD engine never copies caller-supplied
timestamps into storage.
"""

import re
from dataclasses import dataclass
from datetime import datetime

from app.exceptions.base import ValidationError
from .enums import CampusType, OsmAmenity, PosType

# German postal codes range from 01067 (Dresden) to 99998.
MIN_POSTAL_CODE = 1067
MAX_POSTAL_CODE = 99998

HOUSE_NUMBER_PATTERN = re.compile(r"\d+[ \-]?[a-zA-Z]?")


@dataclass(frozen=True, kw_only=True)
class Pos:
    """A point of sale on campus."""
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    name: str
    description: str
    type: PosType
    campus: CampusType
    street: str
    house_number: str
    postal_code: int
    city: str

    def __post_init__(self) -> None:
        if not MIN_POSTAL_CODE <= self.postal_code <= MAX_POSTAL_CODE:
            raise ValidationError(f"Invalid postal code '{self.postal_code}'.", fields=["postal_code"])
        if HOUSE_NUMBER_PATTERN.fullmatch(self.house_number) is None:
            raise ValidationError(f"Invalid house number '{self.house_number}'.", fields=["house_number"])


@dataclass(frozen=True, kw_only=True)
class User:
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    login_name: str
    email_address: str
    first_name: str
    last_name: str


@dataclass(frozen=True, kw_only=True)
class Review:
    """
    A review of one POS by one user.

    `approval_count` and `approved` are managed by the review service; `approved` is
    always derived from the counter and the configured quorum.
    """
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    pos_id: int
    author_id: int
    review: str
    approval_count: int = 0
    approved: bool = False

    def __post_init__(self) -> None:
        if self.approval_count < 0:
            raise ValidationError(
                f"Approval count of review must not be negative, got {self.approval_count}.",
                fields=["approval_count"],
            )


@dataclass(frozen=True, kw_only=True)
class OsmNode:
    """Transient view of an OpenStreetMap node with the attributes needed to build a POS."""
    node_id: int
    name: str
    amenity: OsmAmenity
    city: str
    street: str
    house_number: str
    postcode: str
    description: str
