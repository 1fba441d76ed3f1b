import pytest
from fastapi.testclient import TestClient

import app.main as main_module


def test_health_connected(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    async def up() -> bool:
        return True

    monkeypatch.setattr(main_module, "probe_database", up)
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "sinari", "database": "connected"}
    assert "X-Request-ID" in response.headers


def test_health_disconnected(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    async def down() -> bool:
        return False

    monkeypatch.setattr(main_module, "probe_database", down)
    response = client.get("/health")

    assert response.status_code == 503
    assert response.json()["database"] == "disconnected"


def test_health_needs_no_api_key(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    async def up() -> bool:
        return True

    monkeypatch.setattr(main_module, "probe_database", up)
    assert client.get("/health", headers={}).status_code == 200


def test_unhandled_error_uses_error_envelope(client: TestClient, monkeypatch, admin_headers) -> None:
    from app.certificates import service

    async def boom(repo):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(service, "list_certificates", boom)
    response = client.get("/api/certificates", headers=admin_headers)

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to fetch certificates"
