"""Tests for the HTTP API."""

from datetime import datetime

import pytest
from jose import jwt


class TestAuth:
    def test_health_is_public(self, client):
        res = client.get("/api/health")
        assert res.status_code == 200
        assert res.json()["status"] == "ok"

    def test_missing_token(self, client):
        assert client.get("/api/journal").status_code in (401, 403)

    def test_bad_token(self, client):
        headers = {"Authorization": "Bearer not-a-jwt"}
        assert client.get("/api/journal", headers=headers).status_code == 401

    def test_token_without_sub(self, client, jwt_secret):
        token = jwt.encode({"email": "x@test.com"}, jwt_secret, algorithm="HS256")
        res = client.get("/api/journal", headers={"Authorization": f"Bearer {token}"})
        assert res.status_code == 401


class TestAnalyze:
    def test_analyze(self, client, auth_headers, store):
        res = client.post(
            "/api/analyze",
            headers=auth_headers,
            json={"text": "I am not anxious anymore, I feel grateful"},
        )
        assert res.status_code == 200
        data = res.json()
        assert data["sentiment"]["level"] == "positive"
        assert "gratitude" in data["markers"]
        assert "anxiety" not in data["emotion_counts"]
        assert store.list_user_ids() == []

    def test_analyze_empty(self, client, auth_headers):
        res = client.post("/api/analyze", headers=auth_headers, json={"text": ""})
        assert res.status_code == 200
        assert res.json()["sentiment"]["level"] == "neutral"
        assert res.json()["markers"] == []

    def test_analyze_wrong_type(self, client, auth_headers):
        res = client.post("/api/analyze", headers=auth_headers, json={"text": ["a"]})
        assert res.status_code == 422


class TestJournal:
    def test_list_empty(self, client, auth_headers):
        res = client.get("/api/journal", headers=auth_headers)
        assert res.status_code == 200
        assert res.json() == []

    def test_create_and_list(self, client, auth_headers):
        res = client.post(
            "/api/journal",
            headers=auth_headers,
            json={"content": "Looking back, I learned to accept the change", "title": "Sunday"},
        )
        assert res.status_code == 201
        body = res.json()
        assert body["entry"]["title"] == "Sunday"
        assert "self_reflection" in body["analysis"]["markers"]
        assert body["ers"]["user_id"] == "user-123"

        res = client.get("/api/journal", headers=auth_headers)
        [entry] = res.json()
        assert entry["id"] == body["entry"]["id"]
        assert entry["title"] == "Sunday"

    def test_create_too_short(self, client, auth_headers):
        res = client.post("/api/journal", headers=auth_headers, json={"content": "hi"})
        assert res.status_code == 400
        assert "at least" in res.json()["detail"]

    def test_get_and_delete(self, client, auth_headers, auth_headers_b):
        res = client.post(
            "/api/journal",
            headers=auth_headers,
            json={"content": "Quiet evening, reading and feeling calm"},
        )
        entry_id = res.json()["entry"]["id"]

        assert client.get(f"/api/journal/{entry_id}", headers=auth_headers).status_code == 200
        # Other users cannot see or delete it
        assert client.get(f"/api/journal/{entry_id}", headers=auth_headers_b).status_code == 404
        assert client.delete(f"/api/journal/{entry_id}", headers=auth_headers_b).status_code == 404

        assert client.delete(f"/api/journal/{entry_id}", headers=auth_headers).status_code == 204
        assert client.get(f"/api/journal/{entry_id}", headers=auth_headers).status_code == 404


class TestMood:
    def test_log_and_list(self, client, auth_headers):
        res = client.post(
            "/api/mood",
            headers=auth_headers,
            json={"mood_value": 7, "emotions": ["Calm"], "note": "walk"},
        )
        assert res.status_code == 201
        assert res.json()["entry"]["emotions"] == ["calm"]
        assert res.json()["ers"] is not None

        res = client.get("/api/mood", headers=auth_headers)
        assert [m["mood_value"] for m in res.json()] == [7]

    def test_out_of_range(self, client, auth_headers):
        res = client.post("/api/mood", headers=auth_headers, json={"mood_value": 0})
        assert res.status_code == 400

    @pytest.mark.parametrize("value", ["7", True, 7.0])
    def test_mood_value_not_coerced(self, client, auth_headers, value):
        res = client.post("/api/mood", headers=auth_headers, json={"mood_value": value})
        assert res.status_code == 422
        assert client.get("/api/mood", headers=auth_headers).json() == []

    def test_stats_and_daily(self, client, auth_headers):
        for value in (4, 8):
            client.post("/api/mood", headers=auth_headers, json={"mood_value": value})
        stats = client.get("/api/mood/stats", headers=auth_headers).json()
        assert stats["count"] == 2
        assert stats["average"] == 6.0
        daily = client.get("/api/mood/daily", headers=auth_headers).json()
        assert daily[0]["entry_count"] == 2

    def test_day(self, client, auth_headers):
        client.post(
            "/api/mood",
            headers=auth_headers,
            json={"mood_value": 5, "logged_at": "2024-03-01T08:00:00"},
        )
        res = client.get("/api/mood/day/2024-03-01", headers=auth_headers)
        assert res.status_code == 200
        assert len(res.json()) == 1
        assert client.get("/api/mood/day/garbage", headers=auth_headers).status_code == 400


class TestERS:
    def test_latest_missing(self, client, auth_headers):
        assert client.get("/api/ers/latest", headers=auth_headers).status_code == 404

    def test_calculate_baseline(self, client, auth_headers):
        res = client.post("/api/ers/calculate", headers=auth_headers, json={})
        assert res.status_code == 200
        data = res.json()
        assert data["score"] == 50.0
        assert data["is_baseline"] is True
        assert data["stage_info"]["label"] == "Rebuilding"

    def test_calculate_at_and_history(self, client, auth_headers, store):
        client.post(
            "/api/ers/calculate", headers=auth_headers, json={"at": "2024-03-01T12:00:00"}
        )
        client.post(
            "/api/ers/calculate", headers=auth_headers, json={"at": "2024-03-08T12:00:00"}
        )
        history = client.get("/api/ers", headers=auth_headers).json()
        assert [h["computed_at"] for h in history] == [
            "2024-03-01T12:00:00",
            "2024-03-08T12:00:00",
        ]
        latest = client.get("/api/ers/latest", headers=auth_headers).json()
        assert latest["computed_at"] == "2024-03-08T12:00:00"
        assert store.get_latest_ers_score("user-123").computed_at == datetime(2024, 3, 8, 12)

    @pytest.mark.parametrize("at", ["2024-03-01T12:00:00", "2024-03-08T12:00:00"])
    def test_calculate_at_cannot_overwrite_history(self, client, auth_headers, store, at):
        client.post(
            "/api/ers/calculate", headers=auth_headers, json={"at": "2024-03-08T12:00:00"}
        )
        original = store.get_latest_ers_score("user-123")

        res = client.post("/api/ers/calculate", headers=auth_headers, json={"at": at})
        assert res.status_code == 400
        assert "later than the latest" in res.json()["detail"]
        history = store.list_ers_scores("user-123")
        assert [s.id for s in history] == [original.id]

    def test_readiness(self, client, auth_headers):
        res = client.post(
            "/api/ers/readiness", headers=auth_headers, json={"readiness": "completely"}
        )
        assert res.status_code == 200
        assert res.json()["score"] == 90.0
        assert res.json()["stage"] == "ready"

    def test_readiness_invalid(self, client, auth_headers):
        res = client.post("/api/ers/readiness", headers=auth_headers, json={"readiness": "maybe"})
        assert res.status_code == 422


class TestStorageErrors:
    def test_storage_unavailable_maps_to_503(self, client, auth_headers, store):
        from unittest.mock import patch

        from errors import StorageUnavailableError

        with patch.object(
            store, "list_ers_scores", side_effect=StorageUnavailableError("disk gone")
        ):
            res = client.get("/api/ers", headers=auth_headers)
        assert res.status_code == 503
        assert res.json()["detail"] == "Storage unavailable"
