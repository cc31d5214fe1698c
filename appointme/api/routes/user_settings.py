"""
Account settings: name, email, password and account deletion.
"""
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from appointme.api.deps import CurrentUser, SessionDep
from appointme.models import Message, UpdateEmail, UpdateName, UpdatePassword, UserPublic
from appointme.workflows import accounts

router = APIRouter(prefix="/settings", tags=["settings"])


class SettingsResponse(BaseModel):
    success: bool = True
    msg: str
    user: UserPublic


@router.put("/name", response_model=SettingsResponse)
def update_name(session: SessionDep, current_user: CurrentUser, body: UpdateName) -> Any:
    user = accounts.update_name(session, current_user.id, body.name)
    return SettingsResponse(msg="Name updated successfully", user=accounts.to_public(session, user))


@router.put("/email", response_model=SettingsResponse)
def update_email(session: SessionDep, current_user: CurrentUser, body: UpdateEmail) -> Any:
    user = accounts.update_email(session, current_user.id, body.email)
    return SettingsResponse(msg="Email updated successfully", user=accounts.to_public(session, user))


@router.put("/password", response_model=Message)
def update_password(session: SessionDep, current_user: CurrentUser, body: UpdatePassword) -> Any:
    accounts.update_password(
        session,
        current_user.id,
        current_password=body.current_password,
        new_password=body.new_password,
        confirmation=body.new_password_confirmation,
    )
    return Message(message="Password updated successfully")


@router.delete("/account", response_model=Message)
def delete_account(session: SessionDep, current_user: CurrentUser) -> Any:
    accounts.delete_account(session, current_user.id)
    return Message(message="User deleted successfully")
