from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, insert, select
from sqlalchemy.pool import StaticPool

from dashboard.cache import PageCache, get_page_cache
from dashboard.db.engine import get_engine
from dashboard.db.schema import customers, invoices, metadata
from dashboard.main import app


class RecordingInvalidator:
    """Records invalidated paths instead of touching a real cache."""

    def __init__(self) -> None:
        self.paths: list = []

    def invalidate(self, path: str) -> None:
        self.paths.append(path)


@pytest.fixture
def engine():
    """In-memory SQLite shared across connections, with two customers."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    metadata.create_all(engine)
    with engine.begin() as conn:
        conn.execute(
            insert(customers),
            [
                {"id": "c1", "name": "Lee Robinson", "email": "lee@robinson.com"},
                {"id": "c2", "name": "Amy Burns", "email": "amy@burns.com"},
            ],
        )
    yield engine
    engine.dispose()


@pytest.fixture
def broken_engine(engine):
    """An engine whose tables are gone, so every statement fails."""
    metadata.drop_all(engine)
    return engine


@pytest.fixture
def views() -> RecordingInvalidator:
    return RecordingInvalidator()


@pytest.fixture
def existing_invoice(engine) -> dict:
    row = {
        "id": "inv-1",
        "customer_id": "c1",
        "amount": 1000,
        "status": "paid",
        "date": date(2023, 6, 27),
    }
    with engine.begin() as conn:
        conn.execute(insert(invoices).values(**row))
    return row


@pytest.fixture
def page_cache() -> PageCache:
    return PageCache()


@pytest.fixture
def client(engine, page_cache):
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_page_cache] = lambda: page_cache
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def stored_invoices(engine):
    """Return a callable reading every invoice row, ordered by id."""

    def fetch() -> list:
        with engine.connect() as conn:
            rows = conn.execute(select(invoices).order_by(invoices.c.id)).mappings().all()
        return [dict(row) for row in rows]

    return fetch
