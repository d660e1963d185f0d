from app.exceptions.base import ValidationError


def ensure_matching_id(path_id: int, body_id: int | None) -> None:
    """A PUT body may omit its id; if it carries one, it must be the id of the URL."""
    if body_id is not None and body_id != path_id:
        raise ValidationError(
            f"ID in path ({path_id}) does not match ID in body ({body_id}).",
            fields=["id"],
        )
