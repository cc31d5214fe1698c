"""
Customer/provider authentication - register, login, logout, token refresh.
Every user can book; a verified user can also list services.
"""
from datetime import timedelta
from typing import Annotated, Any

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import BaseModel
from sqlmodel import Session

from appointme import crud
from appointme.api.deps import CurrentUser, SessionDep
from appointme.core import security
from appointme.core.config import settings
from appointme.core.exceptions import AuthError, ValidationError
from appointme.core.logging import get_logger
from appointme.models import LoginRequest, Message, User, UserPublic, UserRegister
from appointme.workflows import accounts

router = APIRouter(prefix="/auth", tags=["auth"])

logger = get_logger(__name__)


class TokenResponse(BaseModel):
    success: bool = True
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserPublic


def _token_response(session: Session, user: User) -> TokenResponse:
    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = security.create_access_token(
        user.id, expires_delta=access_token_expires, scope="user"
    )
    return TokenResponse(
        access_token=access_token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user=accounts.to_public(session, user),
    )


def _login(session: Session, email: str, password: str) -> TokenResponse:
    user = crud.authenticate(session=session, email=email, password=password)
    if not user:
        raise AuthError("Incorrect email or password")
    logger.info({"event_type": "auth", "event_name": "user_login", "user_id": user.id})
    return _token_response(session, user)


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(session: SessionDep, user_in: UserRegister) -> Any:
    """
    Register a new user and return a token for it.
    """
    if crud.get_user_by_email(session=session, email=user_in.email):
        raise ValidationError("The email has already been taken.")
    user = crud.create_user(session=session, user_create=user_in)
    logger.info({"event_type": "auth", "event_name": "user_registered", "user_id": user.id})
    return _token_response(session, user)


@router.post("/login", response_model=TokenResponse)
def login(
    session: SessionDep, form_data: Annotated[OAuth2PasswordRequestForm, Depends()]
) -> Any:
    """
    OAuth2 compatible token login; the username field carries the email.
    """
    return _login(session, form_data.username, form_data.password)


@router.post("/login/json", response_model=TokenResponse)
def login_json(session: SessionDep, login_in: LoginRequest) -> Any:
    return _login(session, login_in.email, login_in.password)


@router.get("/me", response_model=UserPublic)
def read_me(session: SessionDep, current_user: CurrentUser) -> Any:
    return accounts.to_public(session, current_user)


@router.post("/logout", response_model=Message)
def logout(current_user: CurrentUser) -> Any:
    """
    Tokens are stateless; the client discards its copy.
    """
    return Message(message="Successfully logged out")


@router.post("/refresh", response_model=TokenResponse)
def refresh_token(session: SessionDep, current_user: CurrentUser) -> Any:
    return _token_response(session, current_user)
