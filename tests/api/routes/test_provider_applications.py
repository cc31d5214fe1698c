from fastapi.testclient import TestClient
from sqlmodel import Session

from appointme.core.config import settings
from tests.utils.user import create_random_user, token_headers_for

APPLICATIONS_URL = f"{settings.API_V1_STR}/provider-applications"


def _submit(client: TestClient, headers: dict[str, str]):
    return client.post(
        APPLICATIONS_URL,
        headers=headers,
        json={"real_name": "Karim Uddin", "document_url": "https://docs.example.com/nid.pdf"},
    )


def test_submit_and_duplicate(client: TestClient, session: Session) -> None:
    headers = token_headers_for(create_random_user(session))

    first = _submit(client, headers)
    assert first.status_code == 201
    assert first.json()["application_id"]

    second = _submit(client, headers)
    assert second.status_code == 409
    assert second.json()["message"] == "An application is already pending or you are already verified."


def test_submit_requires_valid_document_url(client: TestClient, session: Session) -> None:
    response = client.post(
        APPLICATIONS_URL,
        headers=token_headers_for(create_random_user(session)),
        json={"real_name": "Karim Uddin", "document_url": "not a url"},
    )
    assert response.status_code == 422


def test_admin_approves_and_provider_can_list_services(
    client: TestClient, session: Session, admin_token_headers: dict[str, str]
) -> None:
    user = create_random_user(session)
    user_headers = token_headers_for(user)
    application_id = _submit(client, user_headers).json()["application_id"]

    pending = client.get(APPLICATIONS_URL, headers=admin_token_headers).json()["applications"]
    row = next(a for a in pending if a["id"] == application_id)
    assert row["user"]["email"] == user.email
    assert row["status"] == "pending"

    approve = client.post(f"{APPLICATIONS_URL}/{application_id}/approve", headers=admin_token_headers)
    assert approve.status_code == 200

    me = client.get(f"{settings.API_V1_STR}/auth/me", headers=user_headers).json()
    assert me["is_verified"] is True
    assert me["application_status"] == "approved"

    created = client.post(
        f"{settings.API_V1_STR}/services",
        headers=user_headers,
        json={"name": "Deep Cleaning", "price": 2500},
    )
    assert created.status_code == 201

    inbox = client.get(f"{settings.API_V1_STR}/notifications", headers=user_headers).json()
    assert [n["type"] for n in inbox["notifications"]] == ["application_approved"]


def test_admin_rejects(
    client: TestClient, session: Session, admin_token_headers: dict[str, str]
) -> None:
    user = create_random_user(session)
    user_headers = token_headers_for(user)
    application_id = _submit(client, user_headers).json()["application_id"]

    response = client.post(f"{APPLICATIONS_URL}/{application_id}/reject", headers=admin_token_headers)

    assert response.status_code == 200
    me = client.get(f"{settings.API_V1_STR}/auth/me", headers=user_headers).json()
    assert me["is_verified"] is False
    assert me["application_status"] == "rejected"
    assert _submit(client, user_headers).status_code == 201


def test_review_requires_admin(client: TestClient, session: Session) -> None:
    headers = token_headers_for(create_random_user(session))

    assert client.get(APPLICATIONS_URL, headers=headers).status_code == 401
    assert client.post(f"{APPLICATIONS_URL}/1/approve", headers=headers).status_code == 401


def test_approve_missing_application(client: TestClient, admin_token_headers: dict[str, str]) -> None:
    response = client.post(f"{APPLICATIONS_URL}/999999/approve", headers=admin_token_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Application not found."
