import pytest
from sqlmodel import Session, select

from appointme.booking_models import ApplicationCreate, Notification, ProviderApplication
from appointme.core.exceptions import ConflictError, NotFoundError
from appointme.models import ApplicationStatus, User
from appointme.workflows import applications
from tests.utils.user import create_random_user


def _application_in(name: str = "Real Name") -> ApplicationCreate:
    return ApplicationCreate(real_name=name, document_url="https://docs.example.com/nid.pdf")


def _reload(session: Session, user: User) -> User:
    session.expire_all()
    return session.get(User, user.id)


def _notifications_for(session: Session, user_id: int) -> list[Notification]:
    return list(session.exec(select(Notification).where(Notification.user_id == user_id)).all())


def test_submit_sets_user_pending(session: Session) -> None:
    user = create_random_user(session)

    application = applications.submit(session, user.id, _application_in())

    assert application.status == "pending"
    assert application.document_url == "https://docs.example.com/nid.pdf"
    assert _reload(session, user).application_status == ApplicationStatus.PENDING


def test_submit_twice_while_pending_conflicts(session: Session) -> None:
    user = create_random_user(session)
    applications.submit(session, user.id, _application_in())

    with pytest.raises(ConflictError):
        applications.submit(session, user.id, _application_in())

    count = len(session.exec(
        select(ProviderApplication).where(ProviderApplication.user_id == user.id)
    ).all())
    assert count == 1


def test_verified_user_cannot_submit(session: Session) -> None:
    user = create_random_user(session, verified=True)

    with pytest.raises(ConflictError):
        applications.submit(session, user.id, _application_in())


def test_approve_verifies_user_and_notifies_once(session: Session) -> None:
    user = create_random_user(session)
    application = applications.submit(session, user.id, _application_in())

    approved = applications.approve(session, application.id)

    assert approved.status == "approved"
    reloaded = _reload(session, user)
    assert reloaded.is_verified is True
    assert reloaded.application_status == ApplicationStatus.APPROVED
    notes = _notifications_for(session, user.id)
    assert len(notes) == 1
    assert notes[0].type == "application_approved"
    assert notes[0].message == applications.APPROVED_MESSAGE


def test_reject_never_verifies(session: Session) -> None:
    user = create_random_user(session)
    application = applications.submit(session, user.id, _application_in())

    rejected = applications.reject(session, application.id)

    assert rejected.status == "rejected"
    reloaded = _reload(session, user)
    assert reloaded.is_verified is False
    assert reloaded.application_status == ApplicationStatus.REJECTED
    notes = _notifications_for(session, user.id)
    assert [n.type for n in notes] == ["application_rejected"]


def test_rejected_user_may_reapply(session: Session) -> None:
    user = create_random_user(session)
    first = applications.submit(session, user.id, _application_in())
    applications.reject(session, first.id)

    second = applications.submit(session, user.id, _application_in("Second Try"))

    assert second.id != first.id
    assert _reload(session, user).application_status == ApplicationStatus.PENDING


def test_decide_missing_application(session: Session) -> None:
    with pytest.raises(NotFoundError):
        applications.approve(session, 999999)
    with pytest.raises(NotFoundError):
        applications.reject(session, 999999)


def test_decided_application_cannot_be_decided_again(session: Session) -> None:
    user = create_random_user(session)
    application = applications.submit(session, user.id, _application_in())
    applications.approve(session, application.id)

    with pytest.raises(ConflictError):
        applications.reject(session, application.id)
    assert _reload(session, user).is_verified is True


def test_list_pending_is_oldest_first(session: Session) -> None:
    first_user = create_random_user(session)
    second_user = create_random_user(session)
    decided_user = create_random_user(session)
    first = applications.submit(session, first_user.id, _application_in("First"))
    second = applications.submit(session, second_user.id, _application_in("Second"))
    decided = applications.submit(session, decided_user.id, _application_in("Decided"))
    applications.approve(session, decided.id)

    pending = applications.list_pending(session)
    ids = [a.id for a in pending]

    assert decided.id not in ids
    assert ids.index(first.id) < ids.index(second.id)
    row = next(a for a in pending if a.id == first.id)
    assert row.user.email == first_user.email
    assert row.user.name == first_user.name
