"""
Service layer: the operations callers use, on immutable domain values.

    pos_service = PosService(db, osm_client=OsmClient.from_settings(settings))
    review_service = ReviewService(db, ApprovalConfiguration.from_settings(settings))
"""

from .crud_service import CrudOperations, CrudService
from .pos_service import PosService
from .review_service import ApprovalConfiguration, ReviewService
from .user_service import UserService

__all__ = [
    "ApprovalConfiguration",
    "CrudOperations",
    "CrudService",
    "PosService",
    "ReviewService",
    "UserService",
]
