from fastapi.testclient import TestClient
from sqlmodel import Session

from appointme.booking_models import NotificationType
from appointme.core.config import settings
from appointme.workflows.notifications import notify
from tests.utils.user import create_random_user, token_headers_for


def test_read_and_mark_notifications(client: TestClient, session: Session) -> None:
    user = create_random_user(session)
    other = create_random_user(session)
    for i in range(3):
        notify(session, user.id, NotificationType.BOOKING_CONFIRMED, f"confirmed {i}")
    notify(session, other.id, NotificationType.BOOKING_CONFIRMED, "not yours")
    session.commit()
    headers = token_headers_for(user)

    inbox = client.get(f"{settings.API_V1_STR}/notifications", headers=headers).json()
    assert inbox["unread_count"] == 3
    assert [n["message"] for n in inbox["notifications"]] == ["confirmed 2", "confirmed 1", "confirmed 0"]

    first_id = inbox["notifications"][0]["id"]
    read = client.post(f"{settings.API_V1_STR}/notifications/{first_id}/read", headers=headers)
    assert read.status_code == 200

    read_all = client.post(f"{settings.API_V1_STR}/notifications/read-all", headers=headers)
    assert read_all.json()["message"] == "2 notifications marked as read"

    inbox = client.get(f"{settings.API_V1_STR}/notifications", headers=headers).json()
    assert inbox["unread_count"] == 0


def test_cannot_read_someone_elses_notification(client: TestClient, session: Session) -> None:
    owner = create_random_user(session)
    notification = notify(session, owner.id, NotificationType.NEW_BOOKING, "private")
    session.commit()
    session.refresh(notification)

    response = client.post(
        f"{settings.API_V1_STR}/notifications/{notification.id}/read",
        headers=token_headers_for(create_random_user(session)),
    )
    assert response.status_code == 404
