"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SQLALCHEMY_SLOW_QUERY_THRESHOLD_MS", "0")

from app.crud.repository import Repository
from app.db.base import Base
from app.db.session import enable_sqlite_foreign_keys
from app.services.upload_storage import UploadStorage


class FakeClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(seconds=1)
        return value


@pytest.fixture()
def engine():
    engine = create_engine("sqlite:///:memory:", future=True)
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine) -> Session:
    SessionLocal = sessionmaker(bind=engine, future=True)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def repository(db_session, clock) -> Repository:
    return Repository(db_session, clock=clock)


@pytest.fixture()
def upload_storage(tmp_path) -> UploadStorage:
    return UploadStorage(tmp_path / "uploads", "http://testserver", clock=lambda: 1700000000.5)
