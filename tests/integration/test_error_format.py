"""Integration tests for the {message} error envelope."""

import pytest

pytestmark = pytest.mark.integration


class TestErrorEnvelope:
    def test_malformed_json_has_message(self, api_client, media_store):
        response = api_client.post("/products", data="{", content_type="application/json")
        assert response.status_code == 400
        data = response.json()
        assert set(data.keys()) == {"message"}
        assert "JSON parse error" in data["message"]

    def test_unsupported_media_type_has_message(self, api_client, media_store):
        response = api_client.post("/products", data="name=x", content_type="text/plain")
        assert response.status_code == 415
        assert set(response.json().keys()) == {"message"}

    def test_method_not_allowed_has_message(self, api_client, media_store):
        response = api_client.get("/products/00000000-0000-0000-0000-000000000000")
        assert response.status_code == 405
        assert response.json() == {"message": 'Method "GET" not allowed.'}
