"""
ORM models for the Events Registry API.
Every entity carries a soft-delete flag and a version counter used for
optimistic locking.
"""

from sqlalchemy import (
    Column, Integer, String, DateTime, Boolean, ForeignKey, Table, CheckConstraint
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

# Largest value an Integer id column holds
MAX_ID = 2 ** 31 - 1


event_sponsors = Table(
    "event_sponsors",
    Base.metadata,
    Column("event_id", Integer, ForeignKey("events.id", ondelete="CASCADE"), primary_key=True),
    Column("sponsor_id", Integer, ForeignKey("sponsors.id", ondelete="CASCADE"), primary_key=True),
)


class Event(Base):
    """
    Event hosted at a venue by an organizer, optionally backed by sponsors.
    """
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    description = Column(String(500), nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    capacity = Column(Integer, nullable=False)

    # References by id only, resolved by clients
    venue_id = Column(Integer, nullable=False, index=True)
    organizer_id = Column(Integer, nullable=False, index=True)

    is_deleted = Column(Boolean, default=False, nullable=False, index=True)
    version = Column(Integer, default=1, nullable=False)  # For optimistic locking

    sponsors = relationship("Sponsor", secondary=event_sponsors, back_populates="events")

    __table_args__ = (
        CheckConstraint("capacity BETWEEN 1 AND 10000", name="check_event_capacity_range"),
    )
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f"<Event(id={self.id}, name='{self.name}', date='{self.date}')>"

    @property
    def active_sponsors(self) -> list:
        """Sponsors linked to the event that have not been soft-deleted."""
        return [sponsor for sponsor in self.sponsors if not sponsor.is_deleted]


class Venue(Base):
    """
    Venue where events take place.
    """
    __tablename__ = "venues"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    address = Column(String(200), nullable=False)
    max_capacity = Column(Integer, nullable=False)

    is_deleted = Column(Boolean, default=False, nullable=False, index=True)
    version = Column(Integer, default=1, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f"<Venue(id={self.id}, name='{self.name}')>"


class Organizer(Base):
    __tablename__ = "organizers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    contact = Column(String(20), nullable=False)

    is_deleted = Column(Boolean, default=False, nullable=False, index=True)
    version = Column(Integer, default=1, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f"<Organizer(id={self.id}, name='{self.name}')>"


class Participant(Base):
    __tablename__ = "participants"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    national_id = Column(String(14), nullable=False, index=True)

    is_deleted = Column(Boolean, default=False, nullable=False, index=True)
    version = Column(Integer, default=1, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f"<Participant(id={self.id}, name='{self.name}')>"


class Sponsor(Base):
    """
    Sponsor, linked to any number of events through ``event_sponsors``.
    """
    __tablename__ = "sponsors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    contact = Column(String(20), nullable=False)

    is_deleted = Column(Boolean, default=False, nullable=False, index=True)
    version = Column(Integer, default=1, nullable=False)

    events = relationship("Event", secondary=event_sponsors, back_populates="sponsors")

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f"<Sponsor(id={self.id}, name='{self.name}')>"


class Registration(Base):
    """
    Enrollment of a participant in an event.
    """
    __tablename__ = "registrations"

    id = Column(Integer, primary_key=True, index=True)
    registration_date = Column(DateTime, nullable=False)
    event_id = Column(Integer, nullable=False, index=True)
    participant_id = Column(Integer, nullable=False, index=True)

    is_deleted = Column(Boolean, default=False, nullable=False, index=True)
    version = Column(Integer, default=1, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return (
            f"<Registration(id={self.id}, event_id={self.event_id}, "
            f"participant_id={self.participant_id})>"
        )
