from fastapi.testclient import TestClient

from appointme.core.config import settings


def test_health_check(client: TestClient) -> None:
    response = client.get(f"{settings.API_V1_STR}/utils/health-check/")
    assert response.status_code == 200
    assert response.json() is True


def test_unknown_route_uses_error_envelope(client: TestClient) -> None:
    response = client.get(f"{settings.API_V1_STR}/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Not Found"}
