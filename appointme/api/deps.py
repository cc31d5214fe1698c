from typing import Annotated

import jwt
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from pydantic import ValidationError as PydanticValidationError
from sqlmodel import Session

from appointme.chatbot.gemini import GeminiClient
from appointme.core import security
from appointme.core.config import settings
from appointme.core.db import get_session
from appointme.core.exceptions import AuthError
from appointme.models import AdminAccount, TokenPayload, User

reusable_oauth2 = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login")


SessionDep = Annotated[Session, Depends(get_session)]
TokenDep = Annotated[str, Depends(reusable_oauth2)]


def _token_subject(token: str, scope: security.Scope) -> int:
    try:
        token_data = TokenPayload(**security.decode_token(token))
    except (jwt.InvalidTokenError, PydanticValidationError):
        raise AuthError()
    if token_data.scope != scope or token_data.sub is None:
        raise AuthError()
    try:
        return int(token_data.sub)
    except ValueError:
        raise AuthError()


def get_current_user(session: SessionDep, token: TokenDep) -> User:
    user = session.get(User, _token_subject(token, "user"))
    if not user:
        raise AuthError("User not found")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


def get_current_admin(session: SessionDep, token: TokenDep) -> AdminAccount:
    admin = session.get(AdminAccount, _token_subject(token, "admin"))
    if not admin:
        raise AuthError("Admin not found")
    return admin


CurrentAdmin = Annotated[AdminAccount, Depends(get_current_admin)]


def get_text_generator() -> GeminiClient | None:
    if not settings.GEMINI_API_KEY:
        return None
    return GeminiClient(
        api_key=settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        base_url=settings.GEMINI_BASE_URL,
        timeout=settings.GEMINI_TIMEOUT_SECONDS,
    )


TextGeneratorDep = Annotated[GeminiClient | None, Depends(get_text_generator)]
