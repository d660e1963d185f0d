"""
Conversion of an OpenStreetMap node into a POS.
"""

import logging
import re

from app.domain.enums import AMENITY_TO_POS_TYPE, CampusType
from app.domain.objects import OsmNode, Pos
from app.exceptions.base import MissingFieldError
from app.clients.osm_parser import OSM_NODE

logger = logging.getLogger(__name__)

# int() alone would also take "69_117" or surrounding whitespace
POSTCODE_PATTERN = re.compile(r"[+-]?\d+")


def parse_postcode(node: OsmNode) -> int:
    """
    The postcode tag as an integer.

    Raises:
        MissingFieldError: the tag is not an optionally signed run of digits
    """
    if POSTCODE_PATTERN.fullmatch(node.postcode) is None:
        raise MissingFieldError(OSM_NODE, node.node_id, "postcode")
    return int(node.postcode)


def pos_from_osm_node(node: OsmNode, campus: CampusType) -> Pos:
    """
    Build a POS from a node.

    Raises:
        MissingFieldError: the postcode is not a number
        ValidationError: the POS itself is invalid (postal code range, house number)
    """
    pos = Pos(
        name=node.name,
        description=node.description,
        type=AMENITY_TO_POS_TYPE[node.amenity],
        campus=campus,
        street=node.street,
        house_number=node.house_number,
        postal_code=parse_postcode(node),
        city=node.city,
    )
    logger.debug(
        "osm.node_converted",
        extra={"node_id": node.node_id, "pos_type": pos.type.value, "campus": campus.value},
    )
    return pos
