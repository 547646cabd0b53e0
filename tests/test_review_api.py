"""API tests for the review routes via TestClient, backed by the in-memory store."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app import create_app
from errors import PersistenceError, StoreTimeoutError, ValidationError
from handlers.review_handler import parse_review_id
from services.review_service import ReviewService
from utils.dates import DATE_LAYOUT


def _create(client, body):
    response = client.post("/review", json=body)
    assert response.status_code == 200
    return response.json()


def _parse_stamp(value):
    return datetime.strptime(value, DATE_LAYOUT).replace(tzinfo=timezone.utc)


class TestCreateReview:
    def test_create_inception(self, client, inception):
        response = client.post("/review", json=inception)

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"
        body = response.json()
        assert body["title"] == "Inception"
        assert body["id"] > 0
        assert body["releaseDate"] == "16 Jul 10 00:00"
        assert body["dateCreated"]

    def test_date_created_is_now(self, client, inception):
        before = datetime.now(timezone.utc)
        body = _create(client, inception)
        after = datetime.now(timezone.utc)

        stamp = _parse_stamp(body["dateCreated"])
        assert before - timedelta(minutes=1) <= stamp <= after

    def test_ids_are_unique(self, client, inception):
        ids = {_create(client, inception)["id"] for _ in range(3)}
        assert len(ids) == 3

    def test_client_date_created_is_ignored(self, client, inception):
        body = _create(client, {**inception, "dateCreated": "01 Jan 99 00:00", "id": 77})
        assert body["dateCreated"] != "01 Jan 99 00:00"
        assert body["id"] != 77

    def test_malformed_release_date_falls_back_to_now(self, client, inception):
        before = datetime.now(timezone.utc)
        body = _create(client, {**inception, "releaseDate": "not-a-date"})

        stamp = _parse_stamp(body["releaseDate"])
        assert before - timedelta(minutes=1) <= stamp <= datetime.now(timezone.utc)

    def test_missing_field_is_rejected(self, client, inception):
        del inception["director"]
        response = client.post("/review", json=inception)

        assert response.status_code == 400
        assert "director" in response.json()["Error"]

    def test_empty_title_is_rejected(self, client, inception):
        response = client.post("/review", json={**inception, "title": ""})
        assert response.status_code == 400
        assert list(response.json()) == ["Error"]

    def test_non_string_field_is_rejected(self, client, inception):
        response = client.post("/review", json={**inception, "rating": 9})
        assert response.status_code == 400

    def test_malformed_json_is_rejected(self, client):
        response = client.post(
            "/review", content="{not json", headers={"content-type": "application/json"}
        )
        assert response.status_code == 400
        assert "Error" in response.json()


class TestGetReview:
    def test_round_trip(self, client, inception):
        created = _create(client, inception)

        response = client.get(f"/review/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_missing_review(self, client):
        response = client.get("/review/999999")

        assert response.status_code == 400
        assert response.headers["content-type"] == "application/json"
        assert "not found" in response.json()["Error"]

    @pytest.mark.parametrize("raw_id", ["abc", "1.5", "1_000", "\u0663", "\uff11"])
    def test_non_integer_id(self, client, raw_id):
        response = client.get(f"/review/{raw_id}")

        assert response.status_code == 400
        assert "invalid id" in response.json()["Error"]


@pytest.mark.parametrize("raw_id, expected", [("42", 42), ("+7", 7), ("-3", -3)])
def test_parse_review_id_accepts_ascii_integers(raw_id, expected):
    assert parse_review_id(raw_id) == expected


@pytest.mark.parametrize("raw_id", ["\u0663", "1\u0660", "\uff14\uff12", " 1", ""])
def test_parse_review_id_rejects_anything_but_ascii_digits(raw_id):
    with pytest.raises(ValidationError, match="invalid id"):
        parse_review_id(raw_id)


class TestUpdateReview:
    def test_update_replaces_fields(self, client, inception):
        created = _create(client, inception)
        changes = {**inception, "title": "Inception (Director's Cut)", "rating": "10/10"}

        response = client.put(f"/review/{created['id']}", json=changes)

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == created["id"]
        assert body["title"] == "Inception (Director's Cut)"
        assert body["dateCreated"] == created["dateCreated"]
        assert client.get(f"/review/{created['id']}").json() == body

    def test_path_id_wins_over_body_id(self, client, inception):
        first = _create(client, inception)
        second = _create(client, {**inception, "title": "Tenet"})

        response = client.put(f"/review/{first['id']}", json={**inception, "id": second["id"], "rating": "1/10"})

        assert response.json()["id"] == first["id"]
        assert client.get(f"/review/{second['id']}").json()["rating"] == "9/10"

    def test_update_is_idempotent(self, client, inception):
        created = _create(client, inception)
        changes = {**inception, "reviewNotes": "Even better on rewatch"}

        once = client.put(f"/review/{created['id']}", json=changes).json()
        twice = client.put(f"/review/{created['id']}", json=changes).json()

        assert once == twice == client.get(f"/review/{created['id']}").json()

    def test_update_with_malformed_date_is_idempotent(self, ticking_client, inception):
        created = _create(ticking_client, inception)
        changes = {**inception, "releaseDate": "not-a-date"}

        once = ticking_client.put(f"/review/{created['id']}", json=changes).json()
        twice = ticking_client.put(f"/review/{created['id']}", json=changes).json()

        assert once == twice
        assert twice["releaseDate"] == "not-a-date"

    def test_returned_review_can_be_sent_back(self, client, inception):
        created = _create(client, inception)

        response = client.put(f"/review/{created['id']}", json=created)

        assert response.status_code == 200
        assert response.json() == created

    def test_update_missing_review(self, client, inception):
        response = client.put("/review/999999", json=inception)

        assert response.status_code == 400
        assert "not found" in response.json()["Error"]

    def test_update_bad_id(self, client, inception):
        response = client.put("/review/x", json=inception)
        assert response.status_code == 400


class TestDeleteReview:
    def test_delete_then_get(self, client, inception):
        created = _create(client, inception)

        response = client.delete(f"/review/{created['id']}")

        assert response.status_code == 200
        assert response.content == b'{"deleted":"success"}'
        missing = client.get(f"/review/{created['id']}")
        assert missing.status_code == 400
        assert "not found" in missing.json()["Error"]

    def test_delete_is_not_idempotent(self, client, inception):
        created = _create(client, inception)

        assert client.delete(f"/review/{created['id']}").status_code == 200
        second = client.delete(f"/review/{created['id']}")
        assert second.status_code == 400
        assert "not found" in second.json()["Error"]

    def test_delete_bad_id(self, client):
        assert client.delete("/review/abc").status_code == 400


class TestStoreFailures:
    """Store failures of every kind are flattened to the 400 envelope."""

    @pytest.mark.parametrize(
        "error",
        [PersistenceError("failed to get review: connection refused"), StoreTimeoutError("failed to get review: operation timed out")],
    )
    def test_store_errors_map_to_400(self, error):
        repo = MagicMock()
        repo.get_by_id.side_effect = error
        with TestClient(create_app(ReviewService(repo))) as client:
            response = client.get("/review/1")

        assert response.status_code == 400
        assert response.json() == {"Error": str(error)}

    def test_shutdown_closes_store(self):
        repo = MagicMock()
        with TestClient(create_app(ReviewService(repo))):
            repo.close.assert_not_called()
        repo.close.assert_called_once()
