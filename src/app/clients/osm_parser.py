"""
Parser for OpenStreetMap node payloads (API 0.6 XML).

    <osm version="0.6">
      <node id="5589879349" lat="49.41" lon="8.69">
        <tag k="amenity" v="cafe"/>
        <tag k="name" v="Rada Coffee"/>
        ...
      </node>
    </osm>
"""

import logging
from xml.etree import ElementTree as ET

from app.domain.enums import OsmAmenity
from app.domain.objects import OsmNode
from app.exceptions.base import MissingFieldError

logger = logging.getLogger(__name__)

OSM_NODE = "OsmNode"

REQUIRED_TAGS = (
    "name",
    "addr:city",
    "addr:street",
    "addr:housenumber",
    "addr:postcode",
    "amenity",
)
NAME_TAGS = ("name:en", "name:de", "name")
DESCRIPTION_PLACEHOLDER = "n/a"


class OsmParseError(ValueError):
    """The payload is not an OSM document with a node element, an id and tags."""


def parse_node_tags(payload: str | bytes) -> tuple[int, dict[str, str]]:
    """
    Return the node id and its tags.

    Raises:
        OsmParseError: malformed XML, no <node>, no id, or no <tag> entries
    """
    try:
        root = ET.fromstring(payload)
    except ET.ParseError as exc:
        raise OsmParseError(f"Invalid OSM XML: {exc}") from exc

    node = root if root.tag == "node" else root.find("node")
    if node is None:
        raise OsmParseError("OSM payload contains no <node> element.")

    raw_id = node.get("id")
    if raw_id is None or not raw_id.strip().isdigit():
        raise OsmParseError(f"OSM node has no valid id: {raw_id!r}")

    tags = {tag.get("k"): tag.get("v", "") for tag in node.iter("tag") if tag.get("k")}
    if not tags:
        raise OsmParseError(f"OSM node {raw_id} has no tags.")

    return int(raw_id), tags


def node_from_tags(node_id: int, tags: dict[str, str]) -> OsmNode:
    """
    Extract the attributes needed for a POS.

    Raises:
        MissingFieldError: a required tag is absent or blank (named by its tag key), or
            the amenity is not supported (named "amenity")
    """
    for key in REQUIRED_TAGS:
        if not tags.get(key, "").strip():
            raise MissingFieldError(OSM_NODE, node_id, key)

    amenity = OsmAmenity.from_osm_value(tags["amenity"])
    if amenity is None:
        logger.info("osm.unsupported_amenity", extra={"node_id": node_id, "amenity": tags["amenity"]})
        raise MissingFieldError(OSM_NODE, node_id, "amenity")

    name = next(tags[key] for key in NAME_TAGS if tags.get(key, "").strip())

    return OsmNode(
        node_id=node_id,
        name=name.strip(),
        amenity=amenity,
        city=tags["addr:city"].strip(),
        street=tags["addr:street"].strip(),
        house_number=tags["addr:housenumber"].strip(),
        postcode=tags["addr:postcode"].strip(),
        description=tags.get("description", "").strip() or DESCRIPTION_PLACEHOLDER,
    )


def parse_osm_node(node_id: int, payload: str | bytes) -> OsmNode:
    parsed_id, tags = parse_node_tags(payload)
    if parsed_id != node_id:
        logger.warning("osm.node_id_mismatch", extra={"requested": node_id, "received": parsed_id})
    return node_from_tags(node_id, tags)
