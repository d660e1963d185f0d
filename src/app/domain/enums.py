from enum import Enum


class PosType(str, Enum):
    """Category of a point of sale."""
    CAFE = "CAFE"
    VENDING_MACHINE = "VENDING_MACHINE"
    BAKERY = "BAKERY"
    CAFETERIA = "CAFETERIA"
    OTHER = "OTHER"


class CampusType(str, Enum):
    """Campus a point of sale belongs to."""
    ALTSTADT = "ALTSTADT"
    BERGHEIM = "BERGHEIM"
    INF = "INF"


class OsmAmenity(str, Enum):
    """
    Supported values of the OpenStreetMap `amenity` tag.

    OSM uses lowercase values ("cafe", "fast_food"); `from_osm_value` maps them.
    """
    BAR = "BAR"
    BIERGARTEN = "BIERGARTEN"
    CAFE = "CAFE"
    FAST_FOOD = "FAST_FOOD"
    FOOD_COURT = "FOOD_COURT"
    ICE_CREAM = "ICE_CREAM"
    PUB = "PUB"
    RESTAURANT = "RESTAURANT"
    VENDING_MACHINE = "VENDING_MACHINE"

    @classmethod
    def from_osm_value(cls, value: str) -> "OsmAmenity | None":
        """Return the amenity for an exact OSM tag value ("cafe"), or None if it is not supported."""
        for member in cls:
            if member.value.lower() == value:
                return member
        return None


AMENITY_TO_POS_TYPE: dict[OsmAmenity, PosType] = {
    OsmAmenity.CAFE: PosType.CAFE,
    OsmAmenity.ICE_CREAM: PosType.CAFE,
    OsmAmenity.VENDING_MACHINE: PosType.VENDING_MACHINE,
    OsmAmenity.FOOD_COURT: PosType.CAFETERIA,
    OsmAmenity.BAR: PosType.OTHER,
    OsmAmenity.BIERGARTEN: PosType.OTHER,
    OsmAmenity.PUB: PosType.OTHER,
    OsmAmenity.RESTAURANT: PosType.OTHER,
    OsmAmenity.FAST_FOOD: PosType.OTHER,
}
