"""Request bodies and response checks shared by the HTTP API tests."""

POS_PAYLOAD = {
    "name": "Cafe Botanik",
    "description": "Coffee next to the greenhouse",
    "type": "CAFE",
    "campus": "INF",
    "street": "Im Neuenheimer Feld",
    "house_number": "360",
    "postal_code": 69120,
    "city": "Heidelberg",
}

USER_PAYLOAD = {
    "login_name": "jane_doe",
    "email_address": "jane.doe@uni-heidelberg.de",
    "first_name": "Jane",
    "last_name": "Doe",
}


def assert_error_body(response, status_code: int, error_code: str, path: str) -> dict:
    """Check the common error body and return it for further asserts."""
    body = response.json()
    assert response.status_code == status_code
    assert body["error_code"] == error_code
    assert body["status_code"] == status_code
    assert body["path"] == path
    assert body["status_message"]
    assert body["timestamp"]
    return body
