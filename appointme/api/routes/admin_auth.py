"""
Admin authentication. Admins are separate accounts with `admin` scoped tokens.
"""
from datetime import timedelta
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from appointme import crud
from appointme.api.deps import CurrentAdmin, SessionDep
from appointme.core import security
from appointme.core.config import settings
from appointme.core.exceptions import AuthError, ValidationError
from appointme.core.logging import get_logger
from appointme.models import AdminAccount, AdminLogin, AdminPublic, AdminSignup

router = APIRouter(prefix="/admin", tags=["admin"])

logger = get_logger(__name__)


class AdminTokenResponse(BaseModel):
    success: bool = True
    token: str
    admin: AdminPublic | None = None
    msg: str | None = None


class AdminMessage(BaseModel):
    success: bool = True
    msg: str


def _admin_token(admin: AdminAccount) -> str:
    return security.create_access_token(
        admin.id,
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        scope="admin",
    )


@router.post("/signup", response_model=AdminTokenResponse)
def signup(session: SessionDep, admin_in: AdminSignup) -> Any:
    if crud.get_admin_by_email(session=session, email=admin_in.email):
        raise ValidationError("The email has already been taken.")
    admin = crud.create_admin(session=session, admin_create=admin_in)
    logger.info({"event_type": "auth", "event_name": "admin_registered", "admin_id": admin.id})
    return AdminTokenResponse(
        token=_admin_token(admin),
        admin=AdminPublic.model_validate(admin),
        msg="Admin registration successful",
    )


@router.post("/login", response_model=AdminTokenResponse)
def login(session: SessionDep, login_in: AdminLogin) -> Any:
    admin = crud.authenticate_admin(
        session=session, email=login_in.email, password=login_in.password
    )
    if not admin:
        raise AuthError("Invalid credentials")
    logger.info({"event_type": "auth", "event_name": "admin_login", "admin_id": admin.id})
    return AdminTokenResponse(
        token=_admin_token(admin),
        admin=AdminPublic.model_validate(admin),
        msg="Admin login successful",
    )


@router.post("/logout", response_model=AdminMessage)
def logout(current_admin: CurrentAdmin) -> Any:
    return AdminMessage(msg="Admin logged out successfully")


@router.get("/me", response_model=AdminPublic)
def read_me(current_admin: CurrentAdmin) -> Any:
    return current_admin


@router.post("/refresh", response_model=AdminTokenResponse)
def refresh(current_admin: CurrentAdmin) -> Any:
    return AdminTokenResponse(token=_admin_token(current_admin))
