from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

import contacts_service.models  # noqa: F401
from contacts_service.core.config import Settings
from contacts_service.db.base import Base
from contacts_service.db.session import create_db_engine
from contacts_service.main import create_app
from contacts_service.storage.registry import configure_storage

GEORGE = {
    "name": "George Jungleman",
    "mechanisms": [{"type": "HOME", "mechanism": {"value": "415-888-8899"}}],
}


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    configure_storage()
    session = Session(bind=engine, autoflush=False, expire_on_commit=False)
    yield session
    session.close()


@pytest.fixture
def settings():
    return Settings(_env_file=None, database_url="sqlite://", log_level="DEBUG")


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def george(client):
    """George Jungleman stored with a HOME phone; returns his key."""
    r = client.post("/api/contacts", json=GEORGE)
    assert r.status_code == 201
    return r.json()["key"]
