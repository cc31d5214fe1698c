"""
Profile and account settings, keyed by the authenticated user id.
"""
from sqlmodel import Session, select

from appointme import crud
from appointme.core.exceptions import NotFoundError, ValidationError
from appointme.core.logging import get_logger
from appointme.core.security import get_password_hash, verify_password
from appointme.models import ProfileUpdate, User, UserPublic, utcnow
from appointme.workflows.bookings import transaction

logger = get_logger(__name__)

# form field -> users column
PROFILE_FIELDS = {
    "name": "name",
    "phone": "phone",
    "address": "location",
    "details": "bio",
}


def get_user(session: Session, user_id: int) -> User:
    user = session.get(User, user_id)
    if not user:
        raise NotFoundError("User not found.")
    return user


def to_public(session: Session, user: User) -> UserPublic:
    return UserPublic.model_validate(
        user,
        update={"profile_picture": crud.get_profile_picture(session=session, user_id=user.id)},
    )


def update_profile(session: Session, user_id: int, profile_in: ProfileUpdate) -> User:
    """Only the fields present in the request are written."""
    user = get_user(session, user_id)
    changes = profile_in.model_dump(exclude_unset=True)
    if not changes:
        return user

    with transaction(session):
        for field, value in changes.items():
            setattr(user, PROFILE_FIELDS[field], value)
        user.updated_at = utcnow()
        session.add(user)

    session.refresh(user)
    logger.info({
        "event_type": "account",
        "event_name": "profile_updated",
        "user_id": user_id,
        "fields": sorted(changes),
    })
    return user


def update_name(session: Session, user_id: int, name: str) -> User:
    return update_profile(session, user_id, ProfileUpdate(name=name))


def update_email(session: Session, user_id: int, email: str) -> User:
    user = get_user(session, user_id)
    taken = session.exec(
        select(User.id).where(User.email == email, User.id != user_id)
    ).first()
    if taken is not None:
        raise ValidationError("The email has already been taken.")

    with transaction(session):
        user.email = email
        user.updated_at = utcnow()
        session.add(user)

    session.refresh(user)
    return user


def update_password(
    session: Session,
    user_id: int,
    current_password: str,
    new_password: str,
    confirmation: str,
) -> None:
    user = get_user(session, user_id)
    if not verify_password(current_password, user.hashed_password):
        raise ValidationError("Current password is incorrect")
    if new_password != confirmation:
        raise ValidationError("The new password confirmation does not match.")

    with transaction(session):
        user.hashed_password = get_password_hash(new_password)
        user.updated_at = utcnow()
        session.add(user)

    logger.info({"event_type": "account", "event_name": "password_changed", "user_id": user_id})


def delete_account(session: Session, user_id: int) -> None:
    """Removes the user; owned rows go with it through ON DELETE CASCADE."""
    user = get_user(session, user_id)
    with transaction(session):
        session.delete(user)

    logger.info({"event_type": "account", "event_name": "account_deleted", "user_id": user_id})
