from conftest import ENCODING_AES_KEY, TOKEN
from fastapi.testclient import TestClient


def test_health_check(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["webhook_path"] == "/webhook"
    assert data["encrypted"] is True


def test_health_check_hides_secrets(client: TestClient):
    response = client.get("/health")
    assert TOKEN not in response.text
    assert ENCODING_AES_KEY not in response.text
