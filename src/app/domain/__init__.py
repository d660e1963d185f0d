from .enums import AMENITY_TO_POS_TYPE, CampusType, OsmAmenity, PosType
from .objects import OsmNode, Pos, Review, User

__all__ = [
    "AMENITY_TO_POS_TYPE",
    "CampusType",
    "OsmAmenity",
    "PosType",
    "OsmNode",
    "Pos",
    "Review",
    "User",
]
