from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from appointme import crud
from appointme.api.deps import CurrentUser, SessionDep
from appointme.core.config import settings
from appointme.models import ProfilePictureUpdate, ProfileUpdate, UserPublic
from appointme.workflows import accounts

router = APIRouter(prefix="/profile", tags=["profile"])


class ProfileResponse(BaseModel):
    success: bool = True
    message: str | None = None
    user: UserPublic


class PictureResponse(BaseModel):
    success: bool = True
    message: str | None = None
    profile_picture: str


@router.get("", response_model=ProfileResponse)
def read_profile(session: SessionDep, current_user: CurrentUser) -> Any:
    return ProfileResponse(user=accounts.to_public(session, current_user))


@router.put("", response_model=ProfileResponse)
def update_profile(
    session: SessionDep, current_user: CurrentUser, profile_in: ProfileUpdate
) -> Any:
    user = accounts.update_profile(session, current_user.id, profile_in)
    return ProfileResponse(
        message="Profile updated successfully", user=accounts.to_public(session, user)
    )


@router.post("/picture", response_model=PictureResponse)
def update_picture(
    session: SessionDep, current_user: CurrentUser, picture_in: ProfilePictureUpdate
) -> Any:
    picture = crud.set_profile_picture(
        session=session, user_id=current_user.id, url=picture_in.profile_picture
    )
    return PictureResponse(
        message="Profile picture updated successfully", profile_picture=picture.url
    )


@router.get("/picture", response_model=PictureResponse)
def read_picture(session: SessionDep, current_user: CurrentUser) -> Any:
    url = crud.get_profile_picture(session=session, user_id=current_user.id)
    return PictureResponse(profile_picture=url or settings.DEFAULT_PROFILE_PICTURE)
