"""Tests for CPT interpretation endpoints."""

import pytest
from fastapi.testclient import TestClient

from soapnote.api.app import create_app


@pytest.fixture
def client():
    return TestClient(create_app())


class TestInterpret:
    def test_free_text(self, client, sample_cpt_text):
        resp = client.post("/api/v1/cpt/interpret", json={"text": sample_cpt_text})
        assert resp.status_code == 200
        data = resp.json()
        assert data["total_minutes"] == 45
        assert data["total_units"] == 3
        assert data["entry_count"] == 3
        assert data["parsed_count"] == 2
        assert data["unparsed_count"] == 1
        assert data["entries"][2] == {
            "code": "unrecognized text",
            "units": 0,
            "minutes": 0,
            "raw": "unrecognized text",
        }
        assert data["status"].startswith("CPT entries: 3 (parsed: 2)")

    def test_picker_items(self, client):
        resp = client.post(
            "/api/v1/cpt/interpret",
            json={
                "items": [
                    {"code": "97530", "selected": True, "units": "2"},
                    {"code": "97535", "selected": False, "units": "1"},
                    {"code": "97110", "selected": True, "units": "not a number"},
                ]
            },
        )
        assert resp.status_code == 200
        data = resp.json()
        assert [e["code"] for e in data["entries"]] == ["97530", "97110"]
        assert data["entries"][1]["units"] == 0
        assert data["total_minutes"] == 30
        assert data["total_units"] == 2

    def test_fallback_minutes(self, client):
        resp = client.post("/api/v1/cpt/interpret", json={"text": "no codes here", "fallback_minutes": 45})
        data = resp.json()
        assert data["total_minutes"] == 45
        assert data["total_units"] == 3

    def test_empty_request(self, client):
        resp = client.post("/api/v1/cpt/interpret", json={})
        assert resp.status_code == 200
        assert resp.json()["total_units"] == 0

    def test_negative_fallback_rejected(self, client):
        resp = client.post("/api/v1/cpt/interpret", json={"text": "", "fallback_minutes": -1})
        assert resp.status_code == 422


class TestToggle:
    def test_check_empty_selector(self, client):
        resp = client.post(
            "/api/v1/cpt/toggle",
            json={"item": {"code": "97530", "selected": False, "units": None}, "selected": True},
        )
        assert resp.status_code == 200
        assert resp.json() == {"code": "97530", "selected": True, "units": 1}

    def test_uncheck(self, client):
        resp = client.post(
            "/api/v1/cpt/toggle",
            json={"item": {"code": "97530", "selected": True, "units": "2"}, "selected": False},
        )
        assert resp.json() == {"code": "97530", "selected": False, "units": "2"}
