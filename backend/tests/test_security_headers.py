from fastapi.testclient import TestClient
from findride.main import app

client = TestClient(app)


def test_security_headers():
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Welcome to FindRide API"}
    assert response.headers.get("Content-Security-Policy") == "default-src 'self'"
    assert (
        response.headers.get("Strict-Transport-Security")
        == "max-age=63072000; includeSubDomains"
    )
    assert response.headers.get("X-Frame-Options") == "DENY"
    assert response.headers.get("X-Content-Type-Options") == "nosniff"
    assert "Cache-Control" not in response.headers


def test_healthz():
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
