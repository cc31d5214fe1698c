"""
Provider applications: users submit, admins review the pending queue.
"""
from typing import Any

from fastapi import APIRouter, status
from pydantic import BaseModel

from appointme.api.deps import CurrentAdmin, CurrentUser, SessionDep
from appointme.booking_models import ApplicationCreate, ApplicationsPublic
from appointme.models import Message
from appointme.workflows import applications

router = APIRouter(prefix="/provider-applications", tags=["provider-applications"])


class ApplicationSubmitted(BaseModel):
    success: bool = True
    message: str
    application_id: int


@router.get("", response_model=ApplicationsPublic)
def list_pending(session: SessionDep, current_admin: CurrentAdmin) -> Any:
    """
    Pending applications, oldest first.
    """
    return ApplicationsPublic(applications=applications.list_pending(session))


@router.post("", response_model=ApplicationSubmitted, status_code=status.HTTP_201_CREATED)
def submit(
    session: SessionDep, current_user: CurrentUser, application_in: ApplicationCreate
) -> Any:
    application = applications.submit(session, current_user.id, application_in)
    return ApplicationSubmitted(
        message="Application submitted successfully. Please wait for admin review.",
        application_id=application.id,
    )


@router.post("/{application_id}/approve", response_model=Message)
def approve(session: SessionDep, current_admin: CurrentAdmin, application_id: int) -> Any:
    applications.approve(session, application_id)
    return Message(message="Application approved successfully.")


@router.post("/{application_id}/reject", response_model=Message)
def reject(session: SessionDep, current_admin: CurrentAdmin, application_id: int) -> Any:
    applications.reject(session, application_id)
    return Message(message="Application rejected successfully.")
