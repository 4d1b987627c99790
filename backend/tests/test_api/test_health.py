"""
Health endpoint tests
"""
import inspect
from unittest.mock import patch

from fastapi.testclient import TestClient

from storefront_admin import main
from storefront_admin.core.database import DatabasePing


def test_health_runs_in_threadpool():
    # A sync endpoint keeps the blocking psycopg2 ping off the event loop
    assert not inspect.iscoroutinefunction(main.health)


@patch("storefront_admin.main.ping_database")
def test_health_connected(mock_ping):
    mock_ping.return_value = DatabasePing(connected=True, latency_ms=3.2, attempts=1)

    response = TestClient(main.app).get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"]["status"] == "connected"
    assert body["database"]["latency_ms"] == 3.2


@patch("storefront_admin.main.ping_database")
def test_health_degraded(mock_ping):
    mock_ping.return_value = DatabasePing(connected=False, error="could not connect to server", attempts=2)

    response = TestClient(main.app).get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "degraded"
    assert body["database"]["error"] == "could not connect to server"
