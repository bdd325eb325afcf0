"""
Database connection, repositories and unit of work for the Events Registry API.
"""

import logging
from typing import Any, Dict, Generator, Iterable, List, Optional, Type
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, selectinload, Session
from sqlalchemy.pool import StaticPool

from ..models.entities import (
    MAX_ID, Base, Event, Venue, Organizer, Participant, Sponsor, Registration
)

logger = logging.getLogger(__name__)


class DatabaseConnection:
    """
    Database connection manager.
    Handles the engine and per-request session lifetime.
    """

    def __init__(self):
        self.engine = None
        self.SessionLocal = None
        self._initialized = False

    def initialize(self, database_url: str):
        """
        Initialize database connection.

        Args:
            database_url: Database connection URL
        """
        try:
            if database_url.startswith("sqlite"):
                # Single shared connection so in-memory databases survive across sessions
                self.engine = create_engine(
                    database_url,
                    connect_args={"check_same_thread": False},
                    poolclass=StaticPool,
                    echo=False
                )
            else:
                self.engine = create_engine(
                    database_url,
                    pool_pre_ping=True,
                    pool_recycle=300,
                    echo=False
                )

            self.SessionLocal = sessionmaker(
                autocommit=False,
                autoflush=False,
                bind=self.engine
            )

            self._initialized = True
            logger.info("Database connection initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize database connection: {e}")
            raise

    def get_session(self) -> Generator[Session, None, None]:
        """
        Get database session.

        Yields:
            SQLAlchemy database session, closed on every exit path
        """
        if not self._initialized:
            raise RuntimeError("Database not initialized")

        session = self.SessionLocal()
        try:
            yield session
        finally:
            session.close()

    def create_tables(self):
        """Create all database tables."""
        if not self._initialized:
            raise RuntimeError("Database not initialized")

        try:
            Base.metadata.create_all(bind=self.engine)
            logger.info("Database tables created successfully")
        except Exception as e:
            logger.error(f"Failed to create database tables: {e}")
            raise

    def health_check(self) -> bool:
        """
        Check database health.

        Returns:
            True if database is healthy
        """
        if not self._initialized:
            return False

        try:
            session = self.SessionLocal()
            try:
                session.execute(text("SELECT 1"))
                return True
            finally:
                session.close()
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False

    def close(self):
        """Dispose of the engine's connection pool."""
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Database connections closed")
        self._initialized = False


def _storable_id(entity_id: int) -> bool:
    """Ids outside the column range can never match a row."""
    return -MAX_ID - 1 <= entity_id <= MAX_ID


class SoftDeleteRepository:
    """
    Repository for one soft-deletable model.
    Every "active" read excludes rows flagged as deleted.
    """

    def __init__(self, session: Session, model: Type[Base]):
        self.session = session
        self.model = model

    def _active(self, eager_load: Iterable[str] = ()):
        query = self.session.query(self.model).filter(self.model.is_deleted.is_(False))
        for relationship_name in eager_load:
            query = query.options(selectinload(getattr(self.model, relationship_name)))
        return query

    def list_active(self, eager_load: Iterable[str] = ()) -> List[Any]:
        """Get all rows that are not soft-deleted, in insertion order."""
        return self._active(eager_load).order_by(self.model.id).all()

    def get_active(self, entity_id: int, eager_load: Iterable[str] = ()) -> Optional[Any]:
        """Get a row by ID unless it is soft-deleted."""
        if not _storable_id(entity_id):
            return None
        return self._active(eager_load).filter(self.model.id == entity_id).first()

    def exists_active(self, entity_id: int) -> bool:
        """Check whether a row exists and is not soft-deleted."""
        if not _storable_id(entity_id):
            return False
        query = self._active().filter(self.model.id == entity_id)
        return bool(self.session.query(query.exists()).scalar())

    def add(self, entity: Any) -> Any:
        """Stage a new row for insertion."""
        self.session.add(entity)
        return entity


class UnitOfWork:
    """
    Per-request unit of work exposing one repository per entity.
    """

    def __init__(self, session: Session):
        self.session = session
        self.events = SoftDeleteRepository(session, Event)
        self.venues = SoftDeleteRepository(session, Venue)
        self.organizers = SoftDeleteRepository(session, Organizer)
        self.participants = SoftDeleteRepository(session, Participant)
        self.sponsors = SoftDeleteRepository(session, Sponsor)
        self.registrations = SoftDeleteRepository(session, Registration)
        self._repositories: Dict[Type[Base], SoftDeleteRepository] = {
            repo.model: repo
            for repo in (
                self.events, self.venues, self.organizers,
                self.participants, self.sponsors, self.registrations,
            )
        }

    def repository(self, model: Type[Base]) -> SoftDeleteRepository:
        """Get the repository serving a model."""
        return self._repositories[model]

    def commit(self):
        self.session.commit()

    def rollback(self):
        self.session.rollback()

    def refresh(self, entity: Any):
        self.session.refresh(entity)
