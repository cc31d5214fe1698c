"""
Booking lifecycle and provider availability.

A booking moves pending -> confirmed -> completed, or is cancelled (the row is
deleted) while pending or confirmed. Availability is cached per service in
`service_availabilities` but always written for the provider's whole catalog:

- creating or confirming any booking marks every service of the provider booked
- cancelling the provider's last booking marks them all available; a
  completed booking still counts, so only mark_all_available frees it
- completing a booking leaves the flags alone
- mark_all_available clears them unconditionally

Every transition runs in one transaction with the provider's service rows
locked, so the duplicate-booking and last-booking checks cannot interleave.
"""
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, func, select

from appointme.booking_models import (
    ACTIVE_BOOKING_STATUSES,
    Booking,
    BookingStatus,
    CustomerBookingRow,
    NotificationType,
    PaymentStatus,
    ProviderBookingRow,
    Service,
    ServiceAvailability,
)
from appointme.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    SelfBookingError,
)
from appointme.core.logging import get_logger
from appointme.models import ProfilePicture, User, utcnow
from appointme.workflows.notifications import notify

logger = get_logger(__name__, component="bookings")


@dataclass
class Transition:
    """Outcome of a lifecycle transition."""
    booking_id: int
    provider_id: int
    customer_id: int
    service_name: str
    services_updated: int = 0


@contextmanager
def transaction(session: Session) -> Iterator[Session]:
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        raise InternalError() from e
    except Exception:
        session.rollback()
        raise


# ============== AVAILABILITY ==============

def lock_provider_catalog(session: Session, provider_id: int) -> list[int]:
    """Lock the provider's service rows for the rest of the transaction."""
    statement = (
        select(Service.id)
        .where(Service.user_id == provider_id)
        .order_by(col(Service.id))
        .with_for_update()
    )
    return list(session.exec(statement).all())


def ensure_availability_rows(session: Session, provider_id: int) -> int:
    """
    Create the missing availability rows for the provider's catalog.
    Callers hold the catalog lock so concurrent first reads cannot both
    insert; the unique constraint on service_id backs that up.
    """
    statement = (
        select(Service.id)
        .outerjoin(ServiceAvailability, ServiceAvailability.service_id == Service.id)
        .where(Service.user_id == provider_id, col(ServiceAvailability.id).is_(None))
    )
    missing = session.exec(statement).all()
    for service_id in missing:
        session.add(ServiceAvailability(service_id=service_id, is_booked=False))
    if missing:
        session.flush()
        logger.info({
            "event_type": "availability",
            "event_name": "rows_materialized",
            "provider_id": provider_id,
            "count": len(missing),
        })
    return len(missing)


def set_catalog_booked(session: Session, provider_id: int, is_booked: bool) -> int:
    """Write the flag for every service of the provider, returns rows updated."""
    provider_services = select(Service.id).where(Service.user_id == provider_id)
    result = session.execute(
        update(ServiceAvailability)
        .where(col(ServiceAvailability.service_id).in_(provider_services))
        .values(is_booked=is_booked, updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


def count_provider_bookings(session: Session, provider_id: int) -> int:
    """Every booking on the provider's services, completed ones included."""
    statement = (
        select(func.count())
        .select_from(Booking)
        .join(Service, Booking.service_id == Service.id)
        .where(Service.user_id == provider_id)
    )
    return session.exec(statement).one()


def is_service_booked(session: Session, service: Service) -> bool:
    """Read a service's flag, materializing the provider's rows first."""
    with transaction(session):
        lock_provider_catalog(session, service.user_id)
        ensure_availability_rows(session, service.user_id)
    availability = session.exec(
        select(ServiceAvailability).where(ServiceAvailability.service_id == service.id)
    ).one()
    return availability.is_booked


def mark_all_available(session: Session, provider_id: int) -> int:
    """
    Clear the flag for the provider's whole catalog, open bookings or not.
    This is the only way to free the catalog after a completed booking.
    """
    with transaction(session):
        lock_provider_catalog(session, provider_id)
        ensure_availability_rows(session, provider_id)
        updated = set_catalog_booked(session, provider_id, False)

    logger.info({
        "event_type": "availability",
        "event_name": "mark_all_available",
        "provider_id": provider_id,
        "services_updated": updated,
    })
    return updated


# ============== TRANSITIONS ==============

def _get_booking_for_update(session: Session, booking_id: int) -> tuple[Booking, Service]:
    statement = (
        select(Booking, Service)
        .join(Service, Booking.service_id == Service.id)
        .where(Booking.id == booking_id)
        .with_for_update()
    )
    row = session.exec(statement).first()
    if not row:
        raise NotFoundError("Booking not found")
    return row


def _check_provider(service: Service, acting_user_id: int | None) -> None:
    if acting_user_id is not None and service.user_id != acting_user_id:
        raise ForbiddenError("Only the provider of this service can manage the booking")


def get_booking(session: Session, booking_id: int) -> Booking:
    booking = session.get(Booking, booking_id)
    if not booking:
        raise NotFoundError("Booking not found")
    return booking


def create_booking(
    session: Session, service_id: int, customer_id: int, booking_time: str
) -> Booking:
    with transaction(session):
        service = session.exec(
            select(Service).where(Service.id == service_id).with_for_update()
        ).first()
        if not service:
            raise NotFoundError("Service not found")
        if service.user_id == customer_id:
            raise SelfBookingError()

        provider_id = service.user_id
        lock_provider_catalog(session, provider_id)

        existing = session.exec(
            select(Booking.id).where(
                Booking.user_id == customer_id,
                Booking.service_id == service_id,
                col(Booking.status).in_([s.value for s in ACTIVE_BOOKING_STATUSES]),
            )
        ).first()
        if existing is not None:
            raise ConflictError("You have already booked this service")

        ensure_availability_rows(session, provider_id)

        booking = Booking(
            service_id=service_id,
            user_id=customer_id,
            booking_time=booking_time,
            status=BookingStatus.PENDING.value,
            payment_status=PaymentStatus.UNPAID.value,
        )
        session.add(booking)
        session.flush()

        services_updated = set_catalog_booked(session, provider_id, True)

        customer = session.get(User, customer_id)
        customer_name = customer.name if customer else "a customer"
        notify(
            session,
            provider_id,
            NotificationType.NEW_BOOKING,
            f'New booking received for "{service.name}" from {customer_name}. '
            "Please confirm or cancel the booking.",
        )

    session.refresh(booking)
    logger.info({
        "event_type": "booking_lifecycle",
        "event_name": "booking_created",
        "booking_id": booking.id,
        "service_id": service_id,
        "provider_id": provider_id,
        "customer_id": customer_id,
        "services_updated": services_updated,
    })
    return booking


def confirm_booking(
    session: Session, booking_id: int, acting_user_id: int | None = None
) -> Transition:
    """Confirm a pending booking; confirming again re-syncs the catalog flag."""
    with transaction(session):
        booking, service = _get_booking_for_update(session, booking_id)
        _check_provider(service, acting_user_id)
        if booking.status == BookingStatus.COMPLETED:
            raise ConflictError("Completed bookings cannot be confirmed")

        lock_provider_catalog(session, service.user_id)
        ensure_availability_rows(session, service.user_id)

        booking.status = BookingStatus.CONFIRMED.value
        booking.updated_at = utcnow()
        session.add(booking)

        services_updated = set_catalog_booked(session, service.user_id, True)

        notify(
            session,
            booking.user_id,
            NotificationType.BOOKING_CONFIRMED,
            f'Your booking for "{service.name}" has been confirmed by the provider.',
        )

    logger.info({
        "event_type": "booking_lifecycle",
        "event_name": "booking_confirmed",
        "booking_id": booking_id,
        "provider_id": service.user_id,
        "services_updated": services_updated,
    })
    return Transition(
        booking_id=booking_id,
        provider_id=service.user_id,
        customer_id=booking.user_id,
        service_name=service.name,
        services_updated=services_updated,
    )


def cancel_booking(
    session: Session, booking_id: int, acting_user_id: int | None = None
) -> Transition:
    """Delete an open booking; the provider's last booking frees the catalog."""
    with transaction(session):
        booking, service = _get_booking_for_update(session, booking_id)
        _check_provider(service, acting_user_id)
        if booking.status == BookingStatus.COMPLETED:
            raise ConflictError("Completed bookings cannot be cancelled")

        provider_id = service.user_id
        customer_id = booking.user_id
        lock_provider_catalog(session, provider_id)

        session.delete(booking)
        session.flush()

        services_updated = 0
        remaining = count_provider_bookings(session, provider_id)
        if remaining == 0:
            ensure_availability_rows(session, provider_id)
            services_updated = set_catalog_booked(session, provider_id, False)

        notify(
            session,
            customer_id,
            NotificationType.BOOKING_CANCELLED,
            f'Your booking for "{service.name}" has been cancelled by the provider.',
        )

    logger.info({
        "event_type": "booking_lifecycle",
        "event_name": "booking_cancelled",
        "booking_id": booking_id,
        "provider_id": provider_id,
        "remaining_bookings": remaining,
        "services_updated": services_updated,
    })
    return Transition(
        booking_id=booking_id,
        provider_id=provider_id,
        customer_id=customer_id,
        service_name=service.name,
        services_updated=services_updated,
    )


def complete_booking(
    session: Session, booking_id: int, acting_user_id: int | None = None
) -> Transition:
    """Complete a confirmed booking. Availability is not touched."""
    with transaction(session):
        booking, service = _get_booking_for_update(session, booking_id)
        _check_provider(service, acting_user_id)
        if booking.status == BookingStatus.COMPLETED:
            raise ConflictError("Booking is already completed")
        if booking.status != BookingStatus.CONFIRMED:
            raise ConflictError("Only confirmed bookings can be completed")

        booking.status = BookingStatus.COMPLETED.value
        booking.updated_at = utcnow()
        session.add(booking)

        notify(
            session,
            booking.user_id,
            NotificationType.BOOKING_COMPLETED,
            f'Your booking for "{service.name}" has been completed.',
        )

    logger.info({
        "event_type": "booking_lifecycle",
        "event_name": "booking_completed",
        "booking_id": booking_id,
        "provider_id": service.user_id,
    })
    return Transition(
        booking_id=booking_id,
        provider_id=service.user_id,
        customer_id=booking.user_id,
        service_name=service.name,
    )


# ============== LISTINGS ==============

def list_provider_bookings(session: Session, provider_id: int) -> list[ProviderBookingRow]:
    with transaction(session):
        lock_provider_catalog(session, provider_id)
        ensure_availability_rows(session, provider_id)

    statement = (
        select(Booking, Service.name, User.name, ServiceAvailability.is_booked)
        .join(Service, Booking.service_id == Service.id)
        .join(User, Booking.user_id == User.id)
        .outerjoin(ServiceAvailability, ServiceAvailability.service_id == Service.id)
        .where(Service.user_id == provider_id)
        .order_by(col(Booking.id).desc())
    )
    rows = []
    for booking, service_name, customer_name, is_booked in session.exec(statement).all():
        rows.append(ProviderBookingRow(
            booking_id=booking.id,
            service_id=booking.service_id,
            user_id=booking.user_id,
            booking_time=booking.booking_time,
            status=booking.status,
            status_label=BookingStatus(booking.status).label,
            payment_status=PaymentStatus(booking.payment_status).label,
            service_name=service_name,
            booked_by=customer_name,
            is_booked=bool(is_booked),
            created_at=booking.created_at,
        ))
    return rows


def list_customer_bookings(session: Session, customer_id: int) -> list[CustomerBookingRow]:
    statement = (
        select(Booking, Service.name, Service.price, User.name, ProfilePicture.url)
        .join(Service, Booking.service_id == Service.id)
        .join(User, Service.user_id == User.id)
        .outerjoin(ProfilePicture, ProfilePicture.user_id == Service.user_id)
        .where(Booking.user_id == customer_id)
        .order_by(col(Booking.id).desc())
    )
    rows = []
    for booking, service_name, price, provider_name, picture in session.exec(statement).all():
        rows.append(CustomerBookingRow(
            booking_id=booking.id,
            service_id=booking.service_id,
            user_id=booking.user_id,
            booking_time=booking.booking_time,
            status=BookingStatus(booking.status).label,
            payment_status=PaymentStatus(booking.payment_status).label,
            service_name=service_name,
            price=price,
            provider_name=provider_name,
            profile_picture=picture,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        ))
    return rows
