"""Pytest configuration and shared fixtures."""
import os

# Must be set before quizrank.config / quizrank.database are imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["AUTO_CREATE_TABLES"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from quizrank.database import Base, SessionLocal, get_db
from quizrank.main import app
from quizrank.models import Score


@pytest.fixture
def engine(tmp_path):
    """Fresh SQLite file database per test."""
    eng = create_engine(
        f"sqlite:///{tmp_path / 'scores.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=eng)
    try:
        yield eng
    finally:
        eng.dispose()


@pytest.fixture
def session_factory(engine):
    """Sessions with the application's settings, bound to the per-test database."""
    return lambda: SessionLocal(bind=engine)


@pytest.fixture
def db(session_factory) -> Session:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def count_rows(session_factory):
    """Row count read through a fresh session, so it always sees committed data."""
    def _count() -> int:
        with session_factory() as session:
            return session.query(Score).count()
    return _count
