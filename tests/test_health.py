"""Test health check endpoint."""

from fastapi.testclient import TestClient

from app.main import app

client = TestClient(app)


def test_health_check():
    """Test that /health returns 200 with status ok."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"


def test_both_applications_are_mounted():
    """Prioritizer and mediator routes live under /v1."""
    paths = app.openapi()["paths"]
    assert "/v1/prioritizer/analyze" in paths
    assert "/v1/projects" in paths
    assert "/v1/stakeholder/{token}/commit" in paths
    assert "/v1/calendar" in paths
