# tests/conftest.py

from __future__ import annotations

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from task_api.database import create_tables, get_db
from task_api.main import app
from task_api.models import Task, utcnow


@pytest.fixture()
def engine():
    """
    Fresh in-memory SQLite database per test.

    StaticPool keeps the single connection alive so every session sees
    the same tables.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def client(engine):
    """TestClient with get_db pointed at the in-memory database."""

    def _get_test_db():
        with Session(engine) as db:
            yield db

    app.dependency_overrides[get_db] = _get_test_db
    # Server errors are asserted as 500 responses, not re-raised into the test.
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture()
def make_task(session):
    """Insert a task row directly, bypassing the API."""

    def _make(title: str = "T", priority: str = "medium", due_in_days: float | None = None, **fields) -> Task:
        due_date = utcnow() + timedelta(days=due_in_days) if due_in_days is not None else None
        task = Task(title=title, priority=priority, due_date=due_date, **fields)
        session.add(task)
        session.commit()
        session.refresh(task)
        return task

    return _make

