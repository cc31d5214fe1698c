from datetime import datetime, timezone
from enum import Enum

from pydantic import EmailStr
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ApplicationStatus(str, Enum):
    """Provider application state, cached on the user row."""
    NONE = "none"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# ============== USERS ==============

class UserBase(SQLModel):
    name: str = Field(max_length=255)
    email: EmailStr = Field(unique=True, index=True, max_length=255)
    phone: str | None = Field(default=None, max_length=20)
    location: str | None = Field(default=None, max_length=255)
    bio: str | None = Field(default=None, max_length=1000)


class User(UserBase, table=True):
    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    hashed_password: str
    is_verified: bool = False
    application_status: str = Field(default=ApplicationStatus.NONE.value, max_length=20)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class UserRegister(SQLModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr = Field(max_length=255)
    password: str = Field(min_length=8, max_length=40)
    phone: str | None = Field(default=None, max_length=20)


class UserPublic(UserBase):
    id: int
    is_verified: bool
    application_status: str
    profile_picture: str | None = None
    created_at: datetime


class ProfileUpdate(SQLModel):
    """Profile form fields; `address` maps to location and `details` to bio."""
    name: str | None = Field(default=None, min_length=1, max_length=255)
    phone: str | None = Field(default=None, max_length=20)
    address: str | None = Field(default=None, max_length=255)
    details: str | None = Field(default=None, max_length=1000)


class ProfilePictureUpdate(SQLModel):
    profile_picture: str = Field(min_length=1, max_length=2048)


class UpdateName(SQLModel):
    name: str = Field(min_length=1, max_length=255)


class UpdateEmail(SQLModel):
    email: EmailStr = Field(max_length=255)


class UpdatePassword(SQLModel):
    current_password: str
    new_password: str = Field(min_length=8, max_length=40)
    new_password_confirmation: str


class ProfilePicture(SQLModel, table=True):
    __tablename__ = "profile_pictures"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", unique=True, ondelete="CASCADE")
    url: str = Field(max_length=2048)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


# ============== ADMINS ==============

class AdminBase(SQLModel):
    name: str = Field(max_length=255)
    email: EmailStr = Field(unique=True, index=True, max_length=255)


class AdminAccount(AdminBase, table=True):
    __tablename__ = "admin_accounts"

    id: int | None = Field(default=None, primary_key=True)
    hashed_password: str
    created_at: datetime = Field(default_factory=utcnow)


class AdminSignup(SQLModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr = Field(max_length=255)
    password: str = Field(min_length=6, max_length=40)


class AdminLogin(SQLModel):
    email: EmailStr
    password: str


class AdminPublic(AdminBase):
    id: int
    created_at: datetime


# ============== AUTH ==============

class LoginRequest(SQLModel):
    email: EmailStr
    password: str


class TokenPayload(SQLModel):
    sub: str | None = None
    scope: str | None = None


class Message(SQLModel):
    success: bool = True
    message: str
