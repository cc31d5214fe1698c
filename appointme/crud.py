from sqlmodel import Session, select

from appointme.core.security import get_password_hash, verify_password
from appointme.models import (
    AdminAccount,
    AdminSignup,
    ProfilePicture,
    User,
    UserRegister,
    utcnow,
)


def create_user(*, session: Session, user_create: UserRegister) -> User:
    db_obj = User.model_validate(
        user_create, update={"hashed_password": get_password_hash(user_create.password)}
    )
    session.add(db_obj)
    session.commit()
    session.refresh(db_obj)
    return db_obj


def get_user_by_email(*, session: Session, email: str) -> User | None:
    statement = select(User).where(User.email == email)
    return session.exec(statement).first()


def authenticate(*, session: Session, email: str, password: str) -> User | None:
    db_user = get_user_by_email(session=session, email=email)
    if not db_user:
        return None
    if not verify_password(password, db_user.hashed_password):
        return None
    return db_user


def create_admin(*, session: Session, admin_create: AdminSignup) -> AdminAccount:
    db_obj = AdminAccount.model_validate(
        admin_create, update={"hashed_password": get_password_hash(admin_create.password)}
    )
    session.add(db_obj)
    session.commit()
    session.refresh(db_obj)
    return db_obj


def get_admin_by_email(*, session: Session, email: str) -> AdminAccount | None:
    statement = select(AdminAccount).where(AdminAccount.email == email)
    return session.exec(statement).first()


def authenticate_admin(*, session: Session, email: str, password: str) -> AdminAccount | None:
    admin = get_admin_by_email(session=session, email=email)
    if not admin:
        return None
    if not verify_password(password, admin.hashed_password):
        return None
    return admin


def get_profile_picture(*, session: Session, user_id: int) -> str | None:
    picture = session.exec(
        select(ProfilePicture).where(ProfilePicture.user_id == user_id)
    ).first()
    return picture.url if picture else None


def set_profile_picture(*, session: Session, user_id: int, url: str) -> ProfilePicture:
    picture = session.exec(
        select(ProfilePicture).where(ProfilePicture.user_id == user_id)
    ).first()
    if picture:
        picture.url = url
        picture.updated_at = utcnow()
    else:
        picture = ProfilePicture(user_id=user_id, url=url)
    session.add(picture)
    session.commit()
    session.refresh(picture)
    return picture
