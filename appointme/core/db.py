from collections.abc import Generator

from sqlalchemy import event
from sqlmodel import Session, create_engine, select

from appointme import crud
from appointme.core.config import settings
from appointme.core.logging import get_logger
from appointme.models import AdminAccount, AdminSignup

logger = get_logger(__name__)


def _connect_args(uri: str) -> dict:
    # SQLite connections are shared across the threadpool used by sync routes
    if uri.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.SQLALCHEMY_DATABASE_URI,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.SQLALCHEMY_DATABASE_URI),
)


if engine.dialect.name == "sqlite":
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # ON DELETE CASCADE is only honoured with this pragma
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def init_db(session: Session) -> None:
    # schema comes from the Alembic migrations; this only seeds the first admin
    admin = session.exec(
        select(AdminAccount).where(AdminAccount.email == settings.FIRST_SUPERUSER)
    ).first()
    if not admin:
        admin_in = AdminSignup(
            name="Administrator",
            email=settings.FIRST_SUPERUSER,
            password=settings.FIRST_SUPERUSER_PASSWORD,
        )
        admin = crud.create_admin(session=session, admin_create=admin_in)
        logger.info({"event_type": "seed", "event_name": "first_admin_created", "admin_id": admin.id})


def get_session() -> Generator[Session, None, None]:
    """Dependency for getting database session."""
    with Session(engine) as session:
        yield session
