"""
tests/conftest.py — Shared Test Fixtures
=========================================
"""

from __future__ import annotations

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from debtcollector.database.models import Base, Transaction


@pytest.fixture
def db_engine() -> Engine:
    """Create an in-memory SQLite engine with the ledger table.

    Uses StaticPool so all threads share the same in-memory database
    (required by ``asyncio.to_thread`` used in ``run_db``).
    """
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def fetch_row(db_engine: Engine):
    """Return a reader that loads a row straight from the table, bypassing
    the services."""

    def _fetch(transaction_id: int) -> Transaction | None:
        with Session(db_engine, expire_on_commit=False) as session:
            row = session.get(Transaction, transaction_id)
            if row is not None:
                session.expunge(row)
            return row

    return _fetch


@pytest.fixture
def client(db_engine: Engine):
    """FastAPI TestClient wired to the in-memory ledger."""
    from fastapi.testclient import TestClient

    from debtcollector.api.deps import get_engine
    from debtcollector.api.main import app

    app.dependency_overrides[get_engine] = lambda: db_engine
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
