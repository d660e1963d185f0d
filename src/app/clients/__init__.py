from .osm_client import OsmClient
from .osm_parser import OsmParseError, parse_osm_node

__all__ = ["OsmClient", "OsmParseError", "parse_osm_node"]
