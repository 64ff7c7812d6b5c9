"""
Basic test to verify the project setup is working correctly.
"""

from fastapi.testclient import TestClient

from app.main import app, create_app
from app.services import PhraseIndex, load_phrase_index


def test_app_creation():
    """Test that the FastAPI app can be created successfully."""
    assert app is not None
    assert app.title == "Saffa as a Service"


def test_routes_registered():
    """Test that every public route is mounted."""
    paths = {route.path for route in app.routes}
    assert {
        "/",
        "/phrase",
        "/phrase/dutch",
        "/phrase/dutch/all",
        "/phrase/category/{category}",
        "/phrase/{term}",
        "/health",
        "/metrics",
    } <= paths


def test_root_endpoint(app_settings):
    """Test the root endpoint returns expected response."""
    with TestClient(create_app(app_settings)) as client:
        response = client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Saffa as a Service"
    assert data["status"] == "Sharp sharp!"


def test_package_exports(write_dataset):
    """Test that the service package exposes the index loader."""
    index = load_phrase_index(write_dataset([{"text": "Howzit"}]))
    assert isinstance(index, PhraseIndex)
