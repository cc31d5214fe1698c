"""
Provider application review: none -> pending -> approved | rejected.

`users.application_status` is a cached copy of the latest application's state
and is rewritten by every transition here. A rejected user may apply again.
"""
from sqlmodel import Session, col, select

from appointme.booking_models import (
    ApplicantPublic,
    ApplicationCreate,
    ApplicationPublic,
    NotificationType,
    ProviderApplication,
)
from appointme.core.exceptions import ConflictError, NotFoundError
from appointme.core.logging import get_logger
from appointme.models import ApplicationStatus, User, utcnow
from appointme.workflows.bookings import transaction
from appointme.workflows.notifications import notify

logger = get_logger(__name__, component="provider_applications")

APPROVED_MESSAGE = (
    "Congratulations! Your provider application has been approved. "
    "You can now create and manage services."
)
REJECTED_MESSAGE = (
    "We regret to inform you that your provider application has been rejected. "
    "Please review our requirements and feel free to reapply."
)


def _lock_user(session: Session, user_id: int) -> User:
    user = session.exec(select(User).where(User.id == user_id).with_for_update()).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def submit(session: Session, user_id: int, application_in: ApplicationCreate) -> ProviderApplication:
    with transaction(session):
        user = _lock_user(session, user_id)
        if user.application_status == ApplicationStatus.PENDING or user.is_verified:
            raise ConflictError(
                "An application is already pending or you are already verified."
            )

        application = ProviderApplication(
            user_id=user_id,
            real_name=application_in.real_name,
            document_url=str(application_in.document_url),
            status=ApplicationStatus.PENDING.value,
        )
        session.add(application)

        user.application_status = ApplicationStatus.PENDING.value
        user.updated_at = utcnow()
        session.add(user)

    session.refresh(application)
    logger.info({
        "event_type": "provider_application",
        "event_name": "submitted",
        "application_id": application.id,
        "user_id": user_id,
    })
    return application


def _decide(session: Session, application_id: int, status: ApplicationStatus) -> ProviderApplication:
    with transaction(session):
        application = session.exec(
            select(ProviderApplication)
            .where(ProviderApplication.id == application_id)
            .with_for_update()
        ).first()
        if not application:
            raise NotFoundError("Application not found.")
        if application.status != ApplicationStatus.PENDING:
            raise ConflictError(f"Application has already been {application.status}.")

        user = _lock_user(session, application.user_id)

        application.status = status.value
        application.updated_at = utcnow()
        session.add(application)

        user.application_status = status.value
        if status == ApplicationStatus.APPROVED:
            user.is_verified = True
            notify(session, user.id, NotificationType.APPLICATION_APPROVED, APPROVED_MESSAGE)
        else:
            notify(session, user.id, NotificationType.APPLICATION_REJECTED, REJECTED_MESSAGE)
        user.updated_at = utcnow()
        session.add(user)

    session.refresh(application)
    logger.info({
        "event_type": "provider_application",
        "event_name": status.value,
        "application_id": application_id,
        "user_id": application.user_id,
    })
    return application


def approve(session: Session, application_id: int) -> ProviderApplication:
    return _decide(session, application_id, ApplicationStatus.APPROVED)


def reject(session: Session, application_id: int) -> ProviderApplication:
    return _decide(session, application_id, ApplicationStatus.REJECTED)


def list_pending(session: Session) -> list[ApplicationPublic]:
    """Pending applications, oldest first."""
    statement = (
        select(ProviderApplication, User.name, User.email)
        .join(User, ProviderApplication.user_id == User.id)
        .where(ProviderApplication.status == ApplicationStatus.PENDING.value)
        .order_by(col(ProviderApplication.created_at).asc(), col(ProviderApplication.id).asc())
    )
    return [
        ApplicationPublic(
            id=application.id,
            user_id=application.user_id,
            real_name=application.real_name,
            document_url=application.document_url,
            status=application.status,
            created_at=application.created_at,
            updated_at=application.updated_at,
            user=ApplicantPublic(name=name, email=email),
        )
        for application, name, email in session.exec(statement).all()
    ]
