import random
import string

from fastapi.testclient import TestClient

from appointme.core.config import settings


def random_lower_string() -> str:
    return "".join(random.choices(string.ascii_lowercase, k=32))


def random_email() -> str:
    return f"{random_lower_string()}@{random_lower_string()}.com"


def get_admin_token_headers(client: TestClient) -> dict[str, str]:
    login_data = {
        "email": settings.FIRST_SUPERUSER,
        "password": settings.FIRST_SUPERUSER_PASSWORD,
    }
    r = client.post(f"{settings.API_V1_STR}/admin/login", json=login_data)
    token = r.json()["token"]
    return {"Authorization": f"Bearer {token}"}
