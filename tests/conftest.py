"""
Pytest Configuration and Shared Fixtures

Provides an in-memory database, a seeded random source and an API client
wired to the test session.
"""

import random

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from contentplanner.database import create_db_engine, get_db, init_db
from contentplanner.utils.config import get_settings


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def engine():
    """Fresh in-memory SQLite database per test (one shared connection)."""
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    """Session bound to the in-memory database."""
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


# ============================================================================
# Generator Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded random source so generated data is reproducible."""
    return random.Random(20240601)


# ============================================================================
# API Fixtures
# ============================================================================

@pytest.fixture
def client(db, monkeypatch):
    """TestClient whose requests run against the test session."""
    from api import main

    def override_get_db():
        yield db

    main.app.dependency_overrides[get_db] = override_get_db
    monkeypatch.setattr(main, "check_db_connection", lambda: True)
    try:
        yield TestClient(main.app)
    finally:
        main.app.dependency_overrides.clear()


@pytest.fixture
def clean_settings():
    """Drop cached settings before and after a test that changes the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
