from typing import Any

from fastapi import APIRouter

from appointme.api.deps import CurrentUser, SessionDep
from appointme.booking_models import NotificationPublic, NotificationsPublic
from appointme.models import Message
from appointme.workflows import notifications

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationsPublic)
def list_notifications(session: SessionDep, current_user: CurrentUser) -> Any:
    """
    The user's notifications, newest first.
    """
    rows = notifications.list_for_user(session, current_user.id)
    return NotificationsPublic(
        notifications=[NotificationPublic.model_validate(n) for n in rows],
        unread_count=notifications.unread_count(session, current_user.id),
    )


@router.post("/read-all", response_model=Message)
def mark_all_read(session: SessionDep, current_user: CurrentUser) -> Any:
    updated = notifications.mark_all_read(session, current_user.id)
    return Message(message=f"{updated} notifications marked as read")


@router.post("/{notification_id}/read", response_model=Message)
def mark_read(session: SessionDep, current_user: CurrentUser, notification_id: int) -> Any:
    notifications.mark_read(session, current_user.id, notification_id)
    return Message(message="Notification marked as read")
