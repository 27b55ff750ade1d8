"""
Shared fixtures: an in-memory venue catalogue and an isolated config.json.
"""

from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, Event, Venue

NOW = datetime(2026, 10, 17, 12, 0, 0)


@pytest.fixture
def db():
    """Database session on a fresh in-memory SQLite catalogue."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


def seed_venues(db, now):
    """Add four venues with events around ``now``.

    - v1: geocoded, 2 upcoming events and 1 past event
    - v2: not geocoded, 1 upcoming event
    - v3: geocoded, no events
    - v4: geocoded next to v1, 12 upcoming events
    """
    db.add_all([
        Venue(id="v1", name="Harbiye", city="Istanbul", latitude=41.0, longitude=29.0),
        Venue(id="v2", name="Unknown Hall", city="Istanbul"),
        Venue(id="v3", name="Far Away", city="Bursa", latitude=40.0, longitude=30.0),
        Venue(id="v4", name="Zorlu", city="Istanbul", latitude=41.0, longitude=29.0),
    ])
    db.add_all([
        Event(name="Jazz", starts_at=now + timedelta(days=1), venue_id="v1"),
        Event(name="Rock", starts_at=now + timedelta(days=2), venue_id="v1"),
        Event(name="Past", starts_at=now - timedelta(days=2), venue_id="v1"),
        Event(name="Folk", starts_at=now + timedelta(days=3), venue_id="v2"),
        Event(name="Orphan", starts_at=now + timedelta(days=3), venue_id=None),
    ])
    db.add_all([
        Event(name=f"Show {i}", starts_at=now + timedelta(days=i + 1), venue_id="v4")
        for i in range(12)
    ])
    db.commit()


@pytest.fixture
def seeded_db(db):
    """Catalogue seeded relative to the fixed NOW."""
    seed_venues(db, NOW)
    return db


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    """Point config.json at a temporary file that does not exist yet."""
    path = tmp_path / "config.json"
    monkeypatch.setattr("logic.config.CONFIG_PATH", str(path))
    return path
