"""
Shared fixtures: a fresh file-backed SQLite database per test and services
running on a fixed clock.
"""
import os

# Keep the module-level engine off MySQL while the app is imported in tests
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from mindcare.api.dependencies import get_account_service, get_diary_service
from mindcare.db.session import init_db, make_engine, make_session_factory
from mindcare.main import app
from mindcare.services.account_service import AccountService
from mindcare.services.blob_store import LocalBlobStore
from mindcare.services.diary_service import DiaryService
from mindcare.services.event_store import EventStore

NOW = datetime(2026, 10, 19, 15, 30)


class FixedClock:
    """Callable clock the tests can move forward."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'mindcare.db'}")
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def store(session_factory, clock):
    return EventStore(session_factory, clock=clock)


@pytest.fixture
def blob_store(tmp_path):
    return LocalBlobStore(str(tmp_path / "static"), "http://testserver")


@pytest.fixture
def diary(store, blob_store, clock):
    return DiaryService(store, blob_store=blob_store, clock=clock)


@pytest.fixture
def accounts(session_factory):
    return AccountService(session_factory)


@pytest.fixture
def user_id(accounts):
    return accounts.create("ana", "ana@example.com", "secret123")


@pytest.fixture
def client(diary, accounts):
    app.dependency_overrides[get_diary_service] = lambda: diary
    app.dependency_overrides[get_account_service] = lambda: accounts
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
