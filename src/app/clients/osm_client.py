"""
HTTP client for the OpenStreetMap API.

`fetch_node` is the fetch boundary of the import: whatever goes wrong while getting the
node (HTTP 404, any other HTTP or transport error, an empty body, an unparsable payload)
surfaces as `NotFoundError("OsmNode", node_id)`. `MissingFieldError` is the exception:
the node was found, it just lacks data, and the caller is told which tag.

Tests inject an `httpx.MockTransport`:

    client = OsmClient("https://osm.test/api/0.6", transport=httpx.MockTransport(handler))
"""

import logging
import time

import httpx

from app.config.settings import Settings
from app.domain.objects import OsmNode
from app.exceptions.base import MissingFieldError, NotFoundError
from app.utils.logging import get_project_version
from .osm_parser import OSM_NODE, parse_osm_node

logger = logging.getLogger(__name__)


def default_user_agent() -> str:
    return f"CampusCoffee/{get_project_version()}"


class OsmClient:

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent or default_user_agent()
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "OsmClient":
        return cls(settings.OSM_API_BASE_URL, timeout=settings.OSM_API_TIMEOUT_SECONDS, **kwargs)

    async def fetch_node(self, node_id: int) -> OsmNode:
        """
        GET /node/{node_id} and parse the result.

        Raises:
            NotFoundError: the node could not be fetched or parsed
            MissingFieldError: the node lacks a required tag
        """
        start = time.perf_counter()
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent, "Accept": "application/xml"},
                transport=self.transport,
            ) as client:
                response = await client.get(f"/node/{node_id}")

            if response.status_code == httpx.codes.NOT_FOUND:
                logger.info("osm.fetch.not_found", extra={"node_id": node_id})
                raise NotFoundError(OSM_NODE, node_id)
            response.raise_for_status()

            if not response.content.strip():
                logger.warning("osm.fetch.empty_body", extra={"node_id": node_id})
                raise NotFoundError(OSM_NODE, node_id)

            node = parse_osm_node(node_id, response.content)

        except (NotFoundError, MissingFieldError):
            raise
        except Exception as exc:
            logger.warning(
                "osm.fetch.failed",
                extra={"node_id": node_id, "error_type": type(exc).__name__, "error": str(exc)},
            )
            raise NotFoundError(OSM_NODE, node_id) from exc

        logger.info(
            "osm.fetch.success",
            extra={
                "node_id": node_id,
                "amenity": node.amenity.value,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return node
