"""
SQLModel tables and API schemas for the marketplace: services, their
availability flag, bookings, provider applications and notifications.
"""
from datetime import datetime
from enum import Enum, IntEnum
from typing import List, Optional

from pydantic import BaseModel, Field, HttpUrl
from sqlmodel import Field as SQLField, SQLModel

from appointme.models import utcnow


# ============== ENUMS ==============

class BookingStatus(IntEnum):
    """Booking status as stored; cancellation deletes the row."""
    PENDING = 0
    CONFIRMED = 1
    COMPLETED = 2

    @property
    def label(self) -> str:
        return self.name.lower()


ACTIVE_BOOKING_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)


class PaymentStatus(IntEnum):
    UNPAID = 0
    PAID = 1

    @property
    def label(self) -> str:
        return self.name.lower()


class NotificationType(str, Enum):
    NEW_BOOKING = "new_booking"
    BOOKING_CONFIRMED = "booking_confirmed"
    BOOKING_CANCELLED = "booking_cancelled"
    BOOKING_COMPLETED = "booking_completed"
    APPLICATION_APPROVED = "application_approved"
    APPLICATION_REJECTED = "application_rejected"


# ============== DATABASE MODELS (SQLModel) ==============

class Service(SQLModel, table=True):
    """A service listed by one provider."""
    __tablename__ = "services"

    id: Optional[int] = SQLField(default=None, primary_key=True)
    user_id: int = SQLField(foreign_key="users.id", index=True, ondelete="CASCADE")
    name: str = SQLField(max_length=255)
    description: Optional[str] = None
    price: float = SQLField(default=0)
    created_at: datetime = SQLField(default_factory=utcnow)
    updated_at: datetime = SQLField(default_factory=utcnow)


class ServiceAvailability(SQLModel, table=True):
    """
    Cached availability flag, one row per service.
    Written for the whole provider catalog at once by the booking workflow.
    """
    __tablename__ = "service_availabilities"

    id: Optional[int] = SQLField(default=None, primary_key=True)
    service_id: int = SQLField(foreign_key="services.id", unique=True, ondelete="CASCADE")
    is_booked: bool = SQLField(default=False)
    created_at: datetime = SQLField(default_factory=utcnow)
    updated_at: datetime = SQLField(default_factory=utcnow)


class Booking(SQLModel, table=True):
    __tablename__ = "bookings"

    id: Optional[int] = SQLField(default=None, primary_key=True)
    service_id: int = SQLField(foreign_key="services.id", index=True, ondelete="CASCADE")
    user_id: int = SQLField(foreign_key="users.id", index=True, ondelete="CASCADE")
    booking_time: str = SQLField(max_length=100)
    status: int = SQLField(default=BookingStatus.PENDING.value)
    payment_status: int = SQLField(default=PaymentStatus.UNPAID.value)
    created_at: datetime = SQLField(default_factory=utcnow)
    updated_at: datetime = SQLField(default_factory=utcnow)


class ProviderApplication(SQLModel, table=True):
    __tablename__ = "provider_applications"

    id: Optional[int] = SQLField(default=None, primary_key=True)
    user_id: int = SQLField(foreign_key="users.id", index=True, ondelete="CASCADE")
    real_name: str = SQLField(max_length=255)
    document_url: str = SQLField(max_length=2048)
    status: str = SQLField(default="pending", max_length=20)
    created_at: datetime = SQLField(default_factory=utcnow)
    updated_at: datetime = SQLField(default_factory=utcnow)


class Notification(SQLModel, table=True):
    """Append-only inbox entry."""
    __tablename__ = "notifications"

    id: Optional[int] = SQLField(default=None, primary_key=True)
    user_id: int = SQLField(foreign_key="users.id", index=True, ondelete="CASCADE")
    type: str = SQLField(max_length=50)
    message: str
    is_read: bool = SQLField(default=False)
    created_at: datetime = SQLField(default_factory=utcnow)


# ============== API SCHEMAS (Pydantic) ==============

# --- Service Schemas ---
class ServiceCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    price: float = Field(ge=0)


class ServicePublic(BaseModel):
    id: int
    user_id: int
    name: str
    description: Optional[str] = None
    price: float
    is_booked: bool = False

    class Config:
        from_attributes = True


class ServiceDetail(ServicePublic):
    """Service page payload."""
    provider_name: Optional[str] = None
    profile_picture: str


class ServicesPublic(BaseModel):
    success: bool = True
    services: List[ServicePublic]
    count: int


class ServiceResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    service: ServiceDetail


# --- Booking Schemas ---
class BookingCreate(BaseModel):
    service_id: int
    booking_time: str = Field(min_length=1, max_length=100)


class BookingPublic(BaseModel):
    id: int
    service_id: int
    user_id: int
    booking_time: str
    status: int
    payment_status: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BookingCreated(BaseModel):
    success: bool = True
    message: str
    booking: BookingPublic


class ProviderBookingRow(BaseModel):
    """A booking of one of the provider's services."""
    booking_id: int
    service_id: int
    user_id: int
    booking_time: str
    status: int
    status_label: str
    payment_status: str
    service_name: str
    booked_by: str
    is_booked: bool
    created_at: datetime


class CustomerBookingRow(BaseModel):
    """A booking made by the customer."""
    booking_id: int
    service_id: int
    user_id: int
    booking_time: str
    status: str
    payment_status: str
    service_name: str
    price: float
    provider_name: str
    profile_picture: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ProviderBookingsPublic(BaseModel):
    success: bool = True
    bookings: List[ProviderBookingRow]


class CustomerBookingsPublic(BaseModel):
    success: bool = True
    bookings: List[CustomerBookingRow]


class AvailabilityResponse(BaseModel):
    success: bool = True
    message: str
    services_updated: int = 0


# --- Provider Application Schemas ---
class ApplicationCreate(BaseModel):
    real_name: str = Field(min_length=1, max_length=255)
    document_url: HttpUrl


class ApplicantPublic(BaseModel):
    name: str
    email: str


class ApplicationPublic(BaseModel):
    id: int
    user_id: int
    real_name: str
    document_url: str
    status: str
    created_at: datetime
    updated_at: datetime
    user: ApplicantPublic


class ApplicationsPublic(BaseModel):
    success: bool = True
    applications: List[ApplicationPublic]


# --- Notification Schemas ---
class NotificationPublic(BaseModel):
    id: int
    type: str
    message: str
    is_read: bool
    created_at: datetime

    class Config:
        from_attributes = True


class NotificationsPublic(BaseModel):
    success: bool = True
    notifications: List[NotificationPublic]
    unread_count: int
