"""
Request and response bodies of the HTTP API.

DTOs validate field shape (lengths, login-name syntax, email syntax). Domain rules that
need more than one field or the database (postal code range, house numbers, one review
per author) are checked when the DTO is turned into a domain value or by the services.
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints

from app.domain.enums import CampusType, PosType
from app.domain.objects import Pos, Review, User

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
NonBlank = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
LoginName = Annotated[str, StringConstraints(min_length=1, max_length=255, pattern=r"^\w+$")]
ReviewText = Annotated[str, StringConstraints(min_length=10, max_length=5000)]


class _Dto(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PosDto(_Dto):
    name: Name
    description: NonBlank
    type: PosType
    campus: CampusType
    street: NonBlank
    house_number: NonBlank
    postal_code: int
    city: NonBlank

    def to_domain(self, entity_id: int | None = None) -> Pos:
        return Pos(id=entity_id, **self.model_dump(exclude={"id", "created_at", "updated_at"}))


class UserDto(_Dto):
    login_name: LoginName
    email_address: EmailStr
    first_name: Name
    last_name: Name

    def to_domain(self, entity_id: int | None = None) -> User:
        return User(id=entity_id, **self.model_dump(exclude={"id", "created_at", "updated_at"}))


class ReviewDto(_Dto):
    """
    `approval_count` and `approved` are reported, never accepted: the service derives
    them, whatever the client sends.
    """
    pos_id: int
    author_id: int
    review: ReviewText
    approval_count: int = Field(default=0, ge=0)
    approved: bool = False

    def to_domain(self, entity_id: int | None = None) -> Review:
        return Review(id=entity_id, pos_id=self.pos_id, author_id=self.author_id, review=self.review)


class ErrorResponse(BaseModel):
    error_code: str
    message: str
    status_code: int
    status_message: str
    timestamp: datetime
    path: str
