import os
import tempfile
from collections.abc import Generator

# Point the app at a throwaway SQLite database before anything imports settings
_db_dir = tempfile.mkdtemp(prefix="appointme-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["SECRET_KEY"] = "test-secret-key-for-signing-tokens"
os.environ["FIRST_SUPERUSER"] = "admin@appointme.com"
os.environ["FIRST_SUPERUSER_PASSWORD"] = "adminpassword"
os.environ.pop("GEMINI_API_KEY", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from appointme.core.db import engine, init_db  # noqa: E402
from appointme.main import app  # noqa: E402
from tests.utils.utils import get_admin_token_headers  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def db() -> Generator[Session, None, None]:
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        init_db(session)
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(scope="function")
def session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@pytest.fixture(scope="module")
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="module")
def admin_token_headers(client: TestClient) -> dict[str, str]:
    return get_admin_token_headers(client)
