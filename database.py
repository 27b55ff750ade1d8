"""Database setup and models for the venue catalogue.

This module provides the database connection, models, and utilities
for venues and their events using SQLAlchemy. The connection string comes
from the DATABASE_URL setting (SQLite by default).
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, create_engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker

from logic.config import get_settings

DATABASE_URL = get_settings()["database_url"]

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


class Venue(Base):
    """A venue that hosts events.

    Attributes:
        id: Venue identifier, stable across renders.
        name: Display name.
        city: City the venue is in.
        capacity: Audience capacity, if known.
        latitude: Latitude in degrees, None if the venue is not geocoded.
        longitude: Longitude in degrees, None if the venue is not geocoded.
        created_at: When the venue was added.
    """

    __tablename__ = "venues"

    id = Column(String(100), primary_key=True)
    name = Column(String(200), nullable=False, default="")
    city = Column(String(100), nullable=True, index=True)
    capacity = Column(Integer, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    events = relationship("Event", back_populates="venue")

    def to_dict(self):
        """Convert the venue to the dictionary shape used by the marker builder.

        Returns:
            Dictionary with id, name, city, capacity and coordinates.
        """
        coordinates = None
        if self.latitude is not None and self.longitude is not None:
            coordinates = {"lat": self.latitude, "lng": self.longitude}

        return {
            "id": self.id,
            "name": self.name,
            "city": self.city,
            "capacity": self.capacity,
            "coordinates": coordinates,
        }


class Event(Base):
    """A dated event at a venue.

    Attributes:
        id: Primary key auto-incrementing ID.
        name: Event title.
        starts_at: Event start time.
        venue_id: Hosting venue, None if the venue is unknown.
    """

    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    starts_at = Column(DateTime, nullable=False, index=True)
    venue_id = Column(String(100), ForeignKey("venues.id"), nullable=True, index=True)

    venue = relationship("Venue", back_populates="events")


def get_db():
    """Dependency for getting database session.

    Yields:
        Database session that will be closed after use.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize the database by creating all tables."""
    Base.metadata.create_all(bind=engine)
