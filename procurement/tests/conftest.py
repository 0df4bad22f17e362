import os

# settings are read at import time; tests never touch the configured database
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# FORCE model registration
import procurement.models  # noqa

from procurement.db.base import Base
from procurement.db.session import get_db
from procurement.main import create_app


@pytest.fixture(scope="function")
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture(scope="function")
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(session_factory):
    app = create_app()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c


def assert_api_success(res):
    assert res.headers["content-type"].startswith("application/json")
    body = res.json()
    assert "success" in body, "Malformed body: success undefined"
    assert body["success"] is True, body
    assert res.status_code == 200, res.text
    assert "error" not in body
    assert "data" in body
    return body["data"]


def assert_api_error(res, status, must_contain):
    assert res.headers["content-type"].startswith("application/json")
    body = res.json()
    assert "success" in body, "Malformed body: success undefined"
    assert body["success"] is False, body
    assert res.status_code == status, res.text
    assert "error" in body, "Malformed body: error undefined"
    assert must_contain.lower() in body["error"].lower(), body["error"]
    return body["error"]
