import pytest

from app.tests.test_fixtures.api_payloads import POS_PAYLOAD, assert_error_body


class TestPosCrud:

    async def test_create_and_get(self, api_client):
        """
        Behavior:
            - POST /api/pos answers 201 with the stored POS, id and timestamps included.
            - GET /api/pos/{id} returns the same POS.
        """
        response = await api_client.post("/api/pos", json=POS_PAYLOAD)

        assert response.status_code == 201
        created = response.json()
        assert created["id"] is not None
        assert created["created_at"] is not None
        assert {k: created[k] for k in POS_PAYLOAD} == POS_PAYLOAD

        response = await api_client.get(f"/api/pos/{created['id']}")
        assert response.status_code == 200
        assert response.json() == created

    async def test_get_all(self, api_client):
        await api_client.post("/api/pos", json=POS_PAYLOAD)
        await api_client.post("/api/pos", json={**POS_PAYLOAD, "name": "Marstall Cafe"})

        response = await api_client.get("/api/pos")

        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Cafe Botanik", "Marstall Cafe"]

    async def test_filter_by_name(self, api_client):
        await api_client.post("/api/pos", json=POS_PAYLOAD)

        response = await api_client.get("/api/pos/filter", params={"name": "Cafe Botanik"})

        assert response.status_code == 200
        assert response.json()["name"] == "Cafe Botanik"

    async def test_update(self, api_client):
        created = (await api_client.post("/api/pos", json=POS_PAYLOAD)).json()

        response = await api_client.put(
            f"/api/pos/{created['id']}", json={**POS_PAYLOAD, "id": created["id"], "description": "Oat milk now"}
        )

        assert response.status_code == 200
        assert response.json()["description"] == "Oat milk now"
        assert response.json()["created_at"] == created["created_at"]

    async def test_update_id_mismatch(self, api_client):
        created = (await api_client.post("/api/pos", json=POS_PAYLOAD)).json()

        response = await api_client.put(f"/api/pos/{created['id']}", json={**POS_PAYLOAD, "id": created["id"] + 1})

        assert_error_body(response, 400, "ValidationError", f"/api/pos/{created['id']}")

    async def test_delete(self, api_client):
        created = (await api_client.post("/api/pos", json=POS_PAYLOAD)).json()

        response = await api_client.delete(f"/api/pos/{created['id']}")

        assert response.status_code == 204
        assert (await api_client.get(f"/api/pos/{created['id']}")).status_code == 404


class TestPosErrors:

    async def test_duplicate_name(self, api_client):
        """
        Behavior:
            - A second POS with the same name answers 409 with the common error body.
        """
        await api_client.post("/api/pos", json=POS_PAYLOAD)

        response = await api_client.post("/api/pos", json=POS_PAYLOAD)

        body = assert_error_body(response, 409, "DuplicateError", "/api/pos")
        assert body["message"] == "Pos with name 'Cafe Botanik' already exists."
        assert body["status_message"] == "Conflict"

    async def test_not_found(self, api_client):
        response = await api_client.get("/api/pos/4711")

        body = assert_error_body(response, 404, "NotFoundError", "/api/pos/4711")
        assert body["message"] == "Pos with ID 4711 does not exist."

    async def test_filter_unknown_name(self, api_client):
        response = await api_client.get("/api/pos/filter", params={"name": "Nowhere"})

        assert_error_body(response, 404, "NotFoundError", "/api/pos/filter")

    @pytest.mark.parametrize(
        "override",
        [{"name": ""}, {"type": "SPACESHIP"}, {"postal_code": 123}, {"house_number": "12X9"}],
        ids=["blank-name", "unknown-type", "postal-code", "house-number"],
    )
    async def test_invalid_body(self, api_client, override):
        response = await api_client.post("/api/pos", json={**POS_PAYLOAD, **override})

        assert_error_body(response, 400, "ValidationError", "/api/pos")


class TestPosImport:

    async def test_import_from_osm(self, api_client, osm_requests, osm_node_xml, osm_tags):
        osm_requests.responses[5589879349] = osm_node_xml(5589879349, osm_tags)

        response = await api_client.post("/api/pos/import/osm/5589879349", params={"campus_type": "INF"})

        assert response.status_code == 201
        body = response.json()
        assert (body["name"], body["type"], body["campus"]) == ("Campus Café", "CAFE", "INF")
        assert (body["house_number"], body["postal_code"]) == ("21a", 69117)

    async def test_import_unknown_node(self, api_client):
        response = await api_client.post("/api/pos/import/osm/1", params={"campus_type": "INF"})

        body = assert_error_body(response, 404, "NotFoundError", "/api/pos/import/osm/1")
        assert body["message"] == "OsmNode with ID 1 does not exist."

    async def test_import_missing_field(self, api_client, osm_requests, osm_node_xml, osm_tags):
        osm_requests.responses[7] = osm_node_xml(7, {**osm_tags, "addr:postcode": "abc"})

        response = await api_client.post("/api/pos/import/osm/7", params={"campus_type": "INF"})

        body = assert_error_body(response, 400, "MissingFieldError", "/api/pos/import/osm/7")
        assert "postcode" in body["message"]

    async def test_import_requires_campus(self, api_client):
        response = await api_client.post("/api/pos/import/osm/7")

        assert_error_body(response, 400, "ValidationError", "/api/pos/import/osm/7")
