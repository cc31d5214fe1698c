from fastapi.testclient import TestClient
from sqlmodel import Session

from appointme import crud
from appointme.core import security
from appointme.core.config import settings
from appointme.models import User, UserRegister
from tests.utils.utils import random_email, random_lower_string

DEFAULT_PASSWORD = "testpassword123"


def create_random_user(
    session: Session, *, verified: bool = False, password: str = DEFAULT_PASSWORD
) -> User:
    user_in = UserRegister(
        name=f"User {random_lower_string()[:8]}",
        email=random_email(),
        password=password,
    )
    user = crud.create_user(session=session, user_create=user_in)
    if verified:
        user.is_verified = True
        user.application_status = "approved"
        session.add(user)
        session.commit()
        session.refresh(user)
    return user


def token_headers_for(user: User) -> dict[str, str]:
    token = security.create_access_token(user.id, scope="user")
    return {"Authorization": f"Bearer {token}"}


def user_authentication_headers(
    *, client: TestClient, email: str, password: str
) -> dict[str, str]:
    r = client.post(
        f"{settings.API_V1_STR}/auth/login/json",
        json={"email": email, "password": password},
    )
    auth_token = r.json()["access_token"]
    return {"Authorization": f"Bearer {auth_token}"}
