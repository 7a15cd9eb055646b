import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from servico_facil.db import get_db
from servico_facil.deps import get_preference_store, get_redis
from servico_facil.main import app
from servico_facil.models import Base, Provider
from servico_facil.preferences import MemoryPreferenceStore
from servico_facil.routers.proximity import notifier


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    s = session_factory()
    yield s
    s.close()


@pytest.fixture
def store():
    return MemoryPreferenceStore()


@pytest.fixture
def fake_redis():
    return MagicMock()


@pytest.fixture
def client(session_factory, store, fake_redis):
    def _get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_redis] = lambda: fake_redis
    app.dependency_overrides[get_preference_store] = lambda: store
    notifier.reset()
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_provider(db):
    def _make(**kw):
        data = {
            "role": "provider",
            "is_profile_complete": True,
            "display_name": "João Silva",
            "service_type": "Eletricista",
            "neighborhood": "Centro",
            "lat": -22.9068,
            "lon": -43.1729,
        }
        data.update(kw)
        p = Provider(**data)
        db.add(p)
        db.commit()
        db.refresh(p)
        return p

    return _make
