"""Tests for health check endpoint."""

from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy.exc import DatabaseError

from app.main import app
from app.services.app_state import AppStateStore


def test_health_check(client):
    """Health endpoint should return ok status."""
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "app_name" in data


def test_startup_survives_database_error():
    """A broken database during startup is logged and the app still serves."""
    error = DatabaseError("SELECT 1", {}, Exception("file is not a database"))
    with patch.object(AppStateStore, "get_database_initialized", side_effect=error):
        with TestClient(app) as test_client:
            response = test_client.get("/api/v1/health")
    assert response.status_code == 200
