"""
Notification inbox. `notify` only stages the row; the calling workflow commits
it together with the transition that produced it.
"""
from sqlalchemy import update
from sqlmodel import Session, col, func, select

from appointme.booking_models import Notification, NotificationType
from appointme.core.exceptions import NotFoundError


def notify(
    session: Session, user_id: int, notification_type: NotificationType, message: str
) -> Notification:
    notification = Notification(
        user_id=user_id, type=notification_type.value, message=message, is_read=False
    )
    session.add(notification)
    return notification


def list_for_user(session: Session, user_id: int, limit: int = 50) -> list[Notification]:
    statement = (
        select(Notification)
        .where(Notification.user_id == user_id)
        .order_by(col(Notification.created_at).desc(), col(Notification.id).desc())
        .limit(limit)
    )
    return list(session.exec(statement).all())


def unread_count(session: Session, user_id: int) -> int:
    statement = select(func.count()).select_from(Notification).where(
        Notification.user_id == user_id, col(Notification.is_read).is_(False)
    )
    return session.exec(statement).one()


def mark_read(session: Session, user_id: int, notification_id: int) -> Notification:
    notification = session.get(Notification, notification_id)
    if not notification or notification.user_id != user_id:
        raise NotFoundError("Notification not found")
    notification.is_read = True
    session.add(notification)
    session.commit()
    session.refresh(notification)
    return notification


def mark_all_read(session: Session, user_id: int) -> int:
    result = session.execute(
        update(Notification)
        .where(col(Notification.user_id) == user_id, col(Notification.is_read).is_(False))
        .values(is_read=True)
        .execution_options(synchronize_session=False)
    )
    session.commit()
    return result.rowcount
