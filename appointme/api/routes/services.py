"""
API routes for the service catalog.
"""
from typing import Any

from fastapi import APIRouter, status

from appointme.api.deps import CurrentUser, SessionDep
from appointme.booking_models import ServiceCreate, ServiceResponse, ServicesPublic
from appointme.workflows import catalog

router = APIRouter(prefix="/services", tags=["services"])


@router.get("", response_model=ServicesPublic)
def list_services(session: SessionDep) -> Any:
    """
    Public catalog with each service's availability flag.
    """
    services = catalog.list_services(session)
    return ServicesPublic(services=services, count=len(services))


@router.get("/mine", response_model=ServicesPublic)
def list_my_services(session: SessionDep, current_user: CurrentUser) -> Any:
    services = catalog.list_provider_services(session, current_user.id)
    return ServicesPublic(services=services, count=len(services))


@router.post("", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED)
def create_service(
    session: SessionDep, current_user: CurrentUser, service_in: ServiceCreate
) -> Any:
    """
    List a new service. Only verified providers may do this.
    """
    service = catalog.create_service(session, current_user, service_in)
    return ServiceResponse(message="Service created successfully", service=service)


@router.get("/{service_id}", response_model=ServiceResponse)
def get_service(session: SessionDep, service_id: int) -> Any:
    return ServiceResponse(service=catalog.get_service_detail(session, service_id))
