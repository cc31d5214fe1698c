import pytest
from sqlmodel import Session, select

from appointme import crud
from appointme.booking_models import Booking
from appointme.core.exceptions import NotFoundError, ValidationError
from appointme.core.security import verify_password
from appointme.models import ProfileUpdate, User
from appointme.workflows import accounts, bookings
from tests.utils.catalog import create_provider_with_services
from tests.utils.user import DEFAULT_PASSWORD, create_random_user
from tests.utils.utils import random_email


def test_update_profile_maps_form_fields(session: Session) -> None:
    user = create_random_user(session)

    updated = accounts.update_profile(
        session,
        user.id,
        ProfileUpdate(phone="01700000000", address="Dhanmondi, Dhaka", details="Plumber"),
    )

    assert updated.phone == "01700000000"
    assert updated.location == "Dhanmondi, Dhaka"
    assert updated.bio == "Plumber"


def test_update_profile_only_writes_given_fields(session: Session) -> None:
    user = create_random_user(session)
    accounts.update_profile(session, user.id, ProfileUpdate(address="Gulshan"))
    original_name = user.name

    updated = accounts.update_profile(session, user.id, ProfileUpdate(details="Electrician"))

    assert updated.location == "Gulshan"
    assert updated.name == original_name
    assert updated.bio == "Electrician"


def test_update_name(session: Session) -> None:
    user = create_random_user(session)
    assert accounts.update_name(session, user.id, "New Name").name == "New Name"


def test_update_email_rejects_taken_address(session: Session) -> None:
    user = create_random_user(session)
    other = create_random_user(session)

    with pytest.raises(ValidationError, match="already been taken"):
        accounts.update_email(session, user.id, other.email)


def test_update_email_allows_own_address(session: Session) -> None:
    user = create_random_user(session)
    assert accounts.update_email(session, user.id, user.email).email == user.email


def test_update_email(session: Session) -> None:
    user = create_random_user(session)
    email = random_email()
    assert accounts.update_email(session, user.id, email).email == email


def test_update_password_requires_current_password(session: Session) -> None:
    user = create_random_user(session)

    with pytest.raises(ValidationError, match="incorrect"):
        accounts.update_password(session, user.id, "wrong-password", "newpassword1", "newpassword1")


def test_update_password_requires_matching_confirmation(session: Session) -> None:
    user = create_random_user(session)

    with pytest.raises(ValidationError, match="confirmation"):
        accounts.update_password(session, user.id, DEFAULT_PASSWORD, "newpassword1", "newpassword2")


def test_update_password(session: Session) -> None:
    user = create_random_user(session)

    accounts.update_password(session, user.id, DEFAULT_PASSWORD, "newpassword1", "newpassword1")

    session.refresh(user)
    assert verify_password("newpassword1", user.hashed_password)
    assert crud.authenticate(session=session, email=user.email, password="newpassword1")


def test_delete_account_removes_owned_rows(session: Session) -> None:
    provider, (service, _) = create_provider_with_services(session)
    customer = create_random_user(session)
    bookings.create_booking(session, service.id, customer.id, "monday")
    customer_id = customer.id

    accounts.delete_account(session, customer_id)

    session.expire_all()
    assert session.get(User, customer_id) is None
    assert session.exec(select(Booking).where(Booking.user_id == customer_id)).first() is None


def test_get_missing_user(session: Session) -> None:
    with pytest.raises(NotFoundError):
        accounts.get_user(session, 999999)
