"""Tests for the saved prompt history API routes."""

import uuid

import pytest

from conftest import auth_headers


@pytest.fixture
def user_id():
    """Fresh user per test; the API database is shared across tests."""
    return f"user-{uuid.uuid4().hex[:8]}"


def _save(client, user_id, input_prompt="write a poem", output="Write a sonnet about rain."):
    return client.post(
        "/api/v1/history",
        json={"input_prompt": input_prompt, "output_response": output},
        headers=auth_headers(user_id),
    )


class TestHistoryApi:
    """Tests for /api/v1/history."""

    def test_save(self, client, user_id):
        response = _save(client, user_id)

        assert response.status_code == 201
        data = response.json()
        assert data["id"]
        assert data["input_prompt"] == "write a poem"
        assert data["preview"] == "write a poem"

    def test_save_requires_user(self, client):
        response = client.post(
            "/api/v1/history",
            json={"input_prompt": "write a poem", "output_response": "output"},
        )
        assert response.status_code == 401

    def test_save_requires_output(self, client, user_id):
        response = _save(client, user_id, output="")

        assert response.status_code == 400
        assert response.json()["detail"] == "No prompt to save"

    def test_list_with_preview(self, client, user_id):
        long_prompt = "write a long story about " + "a very old lighthouse keeper " * 5
        _save(client, user_id, input_prompt=long_prompt)

        records = client.get("/api/v1/history", headers=auth_headers(user_id)).json()

        assert len(records) == 1
        assert records[0]["input_prompt"] == long_prompt
        assert records[0]["preview"].endswith("...")
        assert len(records[0]["preview"]) <= 63

    def test_list_limit(self, client, user_id):
        _save(client, user_id, input_prompt="first")
        _save(client, user_id, input_prompt="second")
        headers = auth_headers(user_id)

        assert len(client.get("/api/v1/history", headers=headers).json()) == 2
        assert len(client.get("/api/v1/history?limit=1", headers=headers).json()) == 1
        assert client.get("/api/v1/history?limit=0", headers=headers).status_code == 422

    def test_list_is_scoped(self, client, user_id):
        _save(client, user_id)
        other = client.get("/api/v1/history", headers=auth_headers("someone-else-" + user_id))
        assert other.json() == []

    def test_get_and_delete(self, client, user_id):
        record_id = _save(client, user_id).json()["id"]
        headers = auth_headers(user_id)

        assert client.get(f"/api/v1/history/{record_id}", headers=headers).status_code == 200

        response = client.delete(f"/api/v1/history/{record_id}", headers=headers)
        assert response.status_code == 200
        assert response.json() == {"status": "deleted", "id": record_id}

        assert client.get(f"/api/v1/history/{record_id}", headers=headers).status_code == 404
        assert client.delete(f"/api/v1/history/{record_id}", headers=headers).status_code == 404

    def test_cannot_delete_foreign_record(self, client, user_id):
        record_id = _save(client, user_id).json()["id"]

        response = client.delete(
            f"/api/v1/history/{record_id}", headers=auth_headers("intruder-" + user_id)
        )

        assert response.status_code == 404
        assert len(client.get("/api/v1/history", headers=auth_headers(user_id)).json()) == 1
