"""
API routes for bookings.

Customers create bookings and list their own; providers list the bookings of
their services and confirm, complete or cancel them.
"""
from typing import Any

from fastapi import APIRouter, status

from appointme.api.deps import CurrentUser, SessionDep
from appointme.booking_models import (
    AvailabilityResponse,
    BookingCreate,
    BookingCreated,
    BookingPublic,
    CustomerBookingsPublic,
    ProviderBookingsPublic,
)
from appointme.models import Message
from appointme.workflows import bookings

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", response_model=BookingCreated, status_code=status.HTTP_201_CREATED)
def create_booking(
    session: SessionDep, current_user: CurrentUser, booking_in: BookingCreate
) -> Any:
    """
    Book a service for the authenticated customer. Every service of the
    provider becomes unavailable.
    """
    booking = bookings.create_booking(
        session,
        service_id=booking_in.service_id,
        customer_id=current_user.id,
        booking_time=booking_in.booking_time,
    )
    return BookingCreated(
        message="Service booked successfully",
        booking=BookingPublic.model_validate(booking),
    )


@router.get("", response_model=ProviderBookingsPublic)
def list_provider_bookings(session: SessionDep, current_user: CurrentUser) -> Any:
    """
    Bookings made on the authenticated provider's services.
    """
    return ProviderBookingsPublic(
        bookings=bookings.list_provider_bookings(session, current_user.id)
    )


@router.get("/mine", response_model=CustomerBookingsPublic)
def list_my_bookings(session: SessionDep, current_user: CurrentUser) -> Any:
    return CustomerBookingsPublic(
        bookings=bookings.list_customer_bookings(session, current_user.id)
    )


@router.post("/mark-all-available", response_model=AvailabilityResponse)
def mark_all_available(session: SessionDep, current_user: CurrentUser) -> Any:
    """
    Make every service of the provider available again, even with open bookings.
    """
    updated = bookings.mark_all_available(session, current_user.id)
    return AvailabilityResponse(
        message="All your services are now available", services_updated=updated
    )


@router.post("/{booking_id}/confirm", response_model=AvailabilityResponse)
def confirm_booking(session: SessionDep, current_user: CurrentUser, booking_id: int) -> Any:
    result = bookings.confirm_booking(session, booking_id, acting_user_id=current_user.id)
    return AvailabilityResponse(
        message="Booking confirmed successfully",
        services_updated=result.services_updated,
    )


@router.post("/{booking_id}/complete", response_model=Message)
def complete_booking(session: SessionDep, current_user: CurrentUser, booking_id: int) -> Any:
    bookings.complete_booking(session, booking_id, acting_user_id=current_user.id)
    return Message(message="Booking completed successfully")


@router.post("/{booking_id}/cancel", response_model=AvailabilityResponse)
def cancel_booking(session: SessionDep, current_user: CurrentUser, booking_id: int) -> Any:
    result = bookings.cancel_booking(session, booking_id, acting_user_id=current_user.id)
    return AvailabilityResponse(
        message="Booking cancelled successfully",
        services_updated=result.services_updated,
    )


@router.post("/{booking_id}/available", response_model=Message)
def mark_available(session: SessionDep, current_user: CurrentUser, booking_id: int) -> Any:
    """
    Kept for older clients. Availability is per provider, so a single
    booking cannot free it; use mark-all-available instead.
    """
    bookings.get_booking(session, booking_id)
    return Message(
        message="Availability is managed for all your services at once. "
        "Use mark-all-available to make them available again."
    )
