import httpx
import pytest

from app.clients.osm_client import OsmClient
from app.clients.osm_parser import OsmParseError, node_from_tags, parse_node_tags
from app.config import get_settings
from app.domain.enums import OsmAmenity
from app.exceptions.base import MissingFieldError, NotFoundError

NODE_ID = 5589879349


class TestFetchNode:

    async def test_fetches_and_parses_node(self, osm_client, osm_requests, osm_node_xml, osm_tags):
        """
        Behavior:
            - GET {base}/node/{id} with a CampusCoffee User-Agent.
            - The tags become an OsmNode with the amenity mapped to the enum.
        """
        osm_requests.responses[NODE_ID] = osm_node_xml(NODE_ID, osm_tags)

        node = await osm_client.fetch_node(NODE_ID)

        assert node.node_id == NODE_ID
        assert node.name == "Campus Café"
        assert node.amenity is OsmAmenity.CAFE
        assert node.postcode == "69117"

        (request,) = osm_requests.seen
        assert request.method == "GET"
        assert str(request.url) == f"https://osm.test/api/0.6/node/{NODE_ID}"
        assert request.headers["User-Agent"].startswith("CampusCoffee/")

    async def test_custom_user_agent(self, osm_transport, osm_requests, osm_node_xml, osm_tags):
        osm_requests.responses[NODE_ID] = osm_node_xml(NODE_ID, osm_tags)
        client = OsmClient("https://osm.test/api/0.6/", user_agent="CampusCoffee-Test/1.0", transport=osm_transport)

        await client.fetch_node(NODE_ID)

        assert osm_requests.seen[0].headers["User-Agent"] == "CampusCoffee-Test/1.0"
        assert str(osm_requests.seen[0].url) == f"https://osm.test/api/0.6/node/{NODE_ID}"

    @pytest.mark.parametrize(
        "response",
        [
            404,
            410,
            500,
            "",
            "<osm><node id=",
            '<osm version="0.6"></osm>',
            httpx.ConnectError("connection refused"),
            httpx.ReadTimeout("timed out"),
        ],
        ids=["not-found", "gone", "server-error", "empty-body", "malformed-xml", "no-node", "connect", "timeout"],
    )
    async def test_fetch_failures_become_not_found(self, osm_client, osm_requests, response):
        """
        Behavior:
            - Every way of not getting a usable node surfaces as NotFoundError for
              the requested node id.

        Importance:
            - Callers (and the HTTP layer) handle one error for the whole fetch
              boundary instead of transport specifics.
        """
        osm_requests.responses[NODE_ID] = response

        with pytest.raises(NotFoundError) as exc_info:
            await osm_client.fetch_node(NODE_ID)

        assert str(exc_info.value) == f"OsmNode with ID {NODE_ID} does not exist."
        assert exc_info.value.entity_id == NODE_ID

    async def test_missing_tag_passes_through(self, osm_client, osm_requests, osm_node_xml, osm_tags):
        tags = {k: v for k, v in osm_tags.items() if k != "addr:street"}
        osm_requests.responses[NODE_ID] = osm_node_xml(NODE_ID, tags)

        with pytest.raises(MissingFieldError) as exc_info:
            await osm_client.fetch_node(NODE_ID)

        assert exc_info.value.field == "addr:street"

    def test_from_settings(self, osm_transport):
        settings = get_settings()
        client = OsmClient.from_settings(settings, transport=osm_transport)

        assert client.base_url == settings.OSM_API_BASE_URL.rstrip("/")
        assert client.timeout == settings.OSM_API_TIMEOUT_SECONDS


class TestOsmParser:

    def test_prefers_english_name(self, osm_tags):
        node = node_from_tags(NODE_ID, {**osm_tags, "name:en": "Campus Cafe", "name:de": "Campus-Café"})

        assert node.name == "Campus Cafe"

    def test_german_name_before_plain_name(self, osm_tags):
        node = node_from_tags(NODE_ID, {**osm_tags, "name:de": "Campus-Café"})

        assert node.name == "Campus-Café"

    def test_description_tag(self, osm_tags):
        assert node_from_tags(NODE_ID, {**osm_tags, "description": "Fair trade beans"}).description == "Fair trade beans"

    def test_blank_required_tag_is_missing(self, osm_tags):
        with pytest.raises(MissingFieldError) as exc_info:
            node_from_tags(NODE_ID, {**osm_tags, "addr:city": "   "})

        assert exc_info.value.field == "addr:city"

    def test_parse_node_tags(self, osm_node_xml, osm_tags):
        node_id, tags = parse_node_tags(osm_node_xml(NODE_ID, osm_tags))

        assert node_id == NODE_ID
        assert tags == osm_tags

    def test_node_without_tags(self):
        with pytest.raises(OsmParseError):
            parse_node_tags(f'<osm><node id="{NODE_ID}"/></osm>')
