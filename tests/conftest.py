import os
import sys
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker


# Ensure `import backend.app...` works regardless of where pytest is run from.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

TEST_SECRET = "test-secret"

# Must be set before importing backend.app.config so backend/.env is never loaded.
os.environ["DISABLE_DOTENV"] = "1"


@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return tmp_path_factory.mktemp("db") / "test.sqlite3"


@pytest.fixture()
def settings(test_db_path: Path):
    from backend.app.config import Settings

    return Settings(
        database_url=f"sqlite+pysqlite:///{test_db_path}",
        secret_key=TEST_SECRET,
    )


@pytest.fixture()
def app(settings) -> FastAPI:
    """
    Create a FastAPI app wired to a temporary SQLite DB.

    We intentionally do NOT import `app.main` so its startup hook never touches
    the developer database.
    """
    from backend.app import database as db
    from backend.app.config import get_settings

    engine = db.make_engine(settings.database_url)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    # Patch the shared database module so router dependencies use the test DB.
    db.engine = engine
    db.SessionLocal = TestingSessionLocal

    # Import models so Base metadata is populated, then create tables.
    from backend.app import models  # noqa: F401

    db.Base.metadata.drop_all(bind=engine)
    db.Base.metadata.create_all(bind=engine)

    from backend.app.api import auth as auth_api
    from backend.app.api import bids as bids_api
    from backend.app.api import projects as projects_api
    from backend.app.utils.error_handlers import register_exception_handlers

    fastapi_app = FastAPI()
    fastapi_app.include_router(auth_api.router)
    fastapi_app.include_router(projects_api.router)
    fastapi_app.include_router(bids_api.router)
    register_exception_handlers(fastapi_app)
    fastapi_app.dependency_overrides[get_settings] = lambda: settings

    return fastapi_app


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def db_session(app: FastAPI):
    """
    Direct SQLAlchemy session bound to the same temporary SQLite DB used by the test app.
    """
    from backend.app import database as db

    session = db.SessionLocal()
    try:
        yield session
    finally:
        session.close()


# -------------------- helpers shared by API tests --------------------

def register(client, *, email: str, password: str = "pw", role: str = "parent", name: str = "Test User"):
    return client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password, "role": role},
    )


def login(client, *, email: str, password: str = "pw"):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def parent(client):
    data = register(client, email="parent@example.com", role="parent", name="Pat Parent").json()
    return {"token": data["token"], "user": data["user"], "headers": auth_headers(data["token"])}


@pytest.fixture()
def helper(client):
    data = register(client, email="helper@example.com", role="helper", name="Hal Helper").json()
    return {"token": data["token"], "user": data["user"], "headers": auth_headers(data["token"])}


@pytest.fixture()
def make_project(client, parent):
    def _make(headers: dict | None = None, **fields):
        body = {"title": "Science fair volcano", **fields}
        r = client.post("/api/projects", json=body, headers=headers or parent["headers"])
        assert r.status_code == 200, r.text
        return r.json()

    return _make
