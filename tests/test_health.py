"""
Tests for root and health endpoints.
"""


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_detailed_health(client):
    response = client.get("/health/detailed")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["checks"]["database"]["status"] == "healthy"
    assert data["checks"]["storage"]["status"] == "healthy"


def test_detailed_health_reports_database_failure(client, monkeypatch):
    def failing_ping():
        raise RuntimeError("connection refused")

    monkeypatch.setattr(client.app.state.database, "ping", failing_ping)

    data = client.get("/health/detailed").json()

    assert data["status"] == "unhealthy"
    assert data["checks"]["database"]["status"] == "unhealthy"
    assert "connection refused" in data["checks"]["database"]["message"]
