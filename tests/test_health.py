"""
Tests for the health and root endpoints.
"""
from campus_gigs.api.routes import health


def test_health_connected(client, monkeypatch):
    monkeypatch.setattr(health, "check_database", lambda: True)

    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "connected"


def test_health_degraded(client, monkeypatch):
    """Test an unreachable database still answers 200, flagged as degraded."""
    monkeypatch.setattr(health, "check_database", lambda: False)

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "degraded"


def test_root(client):
    assert client.get("/").json() == {"status": "Campus Gigs API running"}
