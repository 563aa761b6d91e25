"""Tests for the HTTP API (``/api/health`` and ``/api/scan``).

``scan_domain`` is patched in the router module so no network is touched,
except for the validation tests which never get that far.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from complyscan.api.app import create_app
from complyscan.errors import HomepageUnreachableError, FetchError, FetchErrorKind, ScanTimeoutError

_RESULT = {
    "success": True,
    "domain": "example.com",
    "url": "https://example.com",
    "analysis": {"source": "heuristic"},
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def client():
    with TestClient(create_app(), raise_server_exceptions=False) as c:
        yield c


@pytest.fixture()
def fake_scan(monkeypatch):
    mock = AsyncMock(return_value=_RESULT)
    monkeypatch.setattr("complyscan.api.routers.scan.scan_domain", mock)
    return mock


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestHealth:
    def test_ok(self, client) -> None:
        resp = client.get("/api/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        assert body["analyzer"]["provider"] == "heuristic"
        assert body["analyzer"]["configured"] is True


class TestScan:
    def test_success(self, client, fake_scan) -> None:
        resp = client.post(
            "/api/scan",
            json={"domain": "example.com", "siteOptions": {"hasPayments": True}},
        )
        assert resp.status_code == 200
        assert resp.json() == _RESULT
        fake_scan.assert_awaited_once_with("example.com", {"hasPayments": True})

    def test_site_options_optional(self, client, fake_scan) -> None:
        resp = client.post("/api/scan", json={"domain": "example.com"})
        assert resp.status_code == 200
        fake_scan.assert_awaited_once_with("example.com", None)

    def test_missing_domain(self, client) -> None:
        resp = client.post("/api/scan", json={})
        assert resp.status_code == 400
        assert resp.json()["error"] == "domain_required"

    def test_invalid_domain(self, client) -> None:
        resp = client.post("/api/scan", json={"domain": "not a domain"})
        assert resp.status_code == 400
        assert resp.json() == {
            "error": "invalid_domain",
            "message": "Please provide a valid domain name",
        }

    def test_unreachable_is_500(self, client, fake_scan) -> None:
        fake_scan.side_effect = HomepageUnreachableError(
            "example.com", FetchError(FetchErrorKind.FORBIDDEN, "https://example.com", "HTTP 403")
        )
        resp = client.post("/api/scan", json={"domain": "example.com"})
        assert resp.status_code == 500
        assert resp.json()["error"] == "forbidden"
        assert "blocking automated requests" in resp.json()["message"]

    def test_deadline_is_504(self, client, fake_scan) -> None:
        fake_scan.side_effect = ScanTimeoutError("example.com", 30)
        resp = client.post("/api/scan", json={"domain": "example.com"})
        assert resp.status_code == 504
        assert resp.json()["error"] == "timeout"

    def test_unexpected_error_is_generic(self, client, fake_scan) -> None:
        fake_scan.side_effect = RuntimeError("database exploded")
        resp = client.post("/api/scan", json={"domain": "example.com"})
        assert resp.status_code == 500
        assert resp.json() == {
            "error": "scan_failed",
            "message": "An error occurred while scanning the domain",
        }
