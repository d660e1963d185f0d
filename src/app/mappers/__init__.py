from .entity_mapper import EntityMapper, pos_mapper, review_mapper, user_mapper

__all__ = ["EntityMapper", "pos_mapper", "review_mapper", "user_mapper"]
