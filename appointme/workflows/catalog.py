"""
Service catalog: listing, the service page, and service creation by verified
providers.
"""
from sqlmodel import Session, col, select

from appointme.booking_models import (
    Service,
    ServiceAvailability,
    ServiceCreate,
    ServiceDetail,
    ServicePublic,
)
from appointme.core.config import settings
from appointme.core.exceptions import ForbiddenError, NotFoundError
from appointme.core.logging import get_logger
from appointme.models import ProfilePicture, User
from appointme.workflows.bookings import (
    is_service_booked,
    lock_provider_catalog,
    transaction,
)

logger = get_logger(__name__)


def _service_rows(session: Session, provider_id: int | None = None) -> list[ServicePublic]:
    statement = (
        select(Service, ServiceAvailability.is_booked)
        .outerjoin(ServiceAvailability, ServiceAvailability.service_id == Service.id)
        .order_by(col(Service.id).desc())
    )
    if provider_id is not None:
        statement = statement.where(Service.user_id == provider_id)
    return [
        ServicePublic(
            id=service.id,
            user_id=service.user_id,
            name=service.name,
            description=service.description,
            price=service.price,
            is_booked=bool(is_booked),
        )
        for service, is_booked in session.exec(statement).all()
    ]


def list_services(session: Session) -> list[ServicePublic]:
    return _service_rows(session)


def list_provider_services(session: Session, provider_id: int) -> list[ServicePublic]:
    return _service_rows(session, provider_id)


def get_service_detail(session: Session, service_id: int) -> ServiceDetail:
    service = session.get(Service, service_id)
    if not service:
        raise NotFoundError("Service not found")

    is_booked = is_service_booked(session, service)
    provider = session.get(User, service.user_id)
    picture = session.exec(
        select(ProfilePicture.url).where(ProfilePicture.user_id == service.user_id)
    ).first()

    return ServiceDetail(
        id=service.id,
        user_id=service.user_id,
        name=service.name,
        description=service.description,
        price=service.price,
        is_booked=is_booked,
        provider_name=provider.name if provider else None,
        profile_picture=picture or settings.DEFAULT_PROFILE_PICTURE,
    )


def create_service(session: Session, provider: User, service_in: ServiceCreate) -> ServiceDetail:
    """
    A new service joins the provider's catalog with the catalog's current
    availability, so a booked provider stays booked across all services.
    """
    if not provider.is_verified:
        raise ForbiddenError("Only verified providers can create services")

    with transaction(session):
        lock_provider_catalog(session, provider.id)
        catalog_booked = session.exec(
            select(ServiceAvailability.id)
            .join(Service, ServiceAvailability.service_id == Service.id)
            .where(Service.user_id == provider.id, col(ServiceAvailability.is_booked).is_(True))
        ).first() is not None

        service = Service(user_id=provider.id, **service_in.model_dump())
        session.add(service)
        session.flush()
        session.add(ServiceAvailability(service_id=service.id, is_booked=catalog_booked))
        service_id = service.id

    logger.info({
        "event_type": "catalog",
        "event_name": "service_created",
        "service_id": service_id,
        "provider_id": provider.id,
        "is_booked": catalog_booked,
    })
    return get_service_detail(session, service_id)
