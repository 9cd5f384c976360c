"""
Tests for the application shell: health check and root endpoint.
"""

from fastapi import status
from fastapi.testclient import TestClient


def test_health_check(client: TestClient):
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == "v1"


def test_root(client: TestClient):
    data = client.get("/").json()

    assert data["docs"] == "/docs"
    assert data["health"] == "/health"


def test_routes_are_versioned(client: TestClient):
    assert client.get("/books/1/reviews").status_code == status.HTTP_404_NOT_FOUND
    assert client.get("/api/v1/books/1/reviews").status_code == status.HTTP_200_OK
