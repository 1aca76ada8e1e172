# tests/conftest.py
import os

# cheap scrypt and no database before the app settings are read
os.environ["PASSWORD_HASH_ROUNDS"] = "4"
os.environ.pop("DATABASE_URL", None)
os.environ.pop("PREFERENCES_PATH", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from docannotate.auth.deps import get_store
from docannotate.db.session import init_db
from docannotate.main import create_app
from docannotate.storage import MemoryStore, SqlStore

PASSWORD = "correct-horse"


@pytest.fixture
def sqlite_sessionmaker():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    try:
        yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    finally:
        engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(request, sqlite_sessionmaker):
    """The same store contract, exercised against both implementations."""
    if request.param == "memory":
        yield MemoryStore()
        return
    session = sqlite_sessionmaker()
    try:
        yield SqlStore(session)
    finally:
        session.close()


@pytest.fixture(params=["memory", "sql"])
def app(request, sqlite_sessionmaker):
    app = create_app()
    if request.param == "sql":
        def _sql_store():
            session = sqlite_sessionmaker()
            try:
                yield SqlStore(session)
            finally:
                session.close()
        app.dependency_overrides[get_store] = _sql_store
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def login(client):
    """Register (or log in) a user and return bearer headers for them.

    Cookies are cleared afterwards so unauthenticated requests stay
    unauthenticated unless headers are passed explicitly.
    """
    def _login(username: str, password: str = PASSWORD) -> dict:
        r = client.post("/api/auth/register", json={"username": username, "password": password})
        if r.status_code == 409:
            r = client.post("/api/auth/login", json={"username": username, "password": password})
        assert r.status_code in (200, 201), r.text
        client.cookies.clear()
        return {"Authorization": f"Bearer {r.json()['accessToken']}"}
    return _login


@pytest.fixture
def make_document(client):
    def _make(headers: dict, name: str = "notes.txt", lines: int = 20) -> dict:
        content = "\n".join(f"line {i}" for i in range(1, lines + 1))
        r = client.post(
            "/api/documents",
            json={"name": name, "content": content, "type": "txt"},
            headers=headers,
        )
        assert r.status_code == 201, r.text
        return r.json()
    return _make
