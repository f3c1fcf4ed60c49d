"""
Database connection management for the business dashboard.

Provides database engine, session management, and connection utilities.
"""
from typing import Generator
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from .. import config
from .models import Base


def _engine_for(url: str, echo: bool = False) -> Engine:
    """Create an engine, pinning SQLite to a single shared connection."""
    is_sqlite = url.startswith("sqlite")
    kwargs = {}
    if is_sqlite:
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
    return create_engine(url, echo=echo, **kwargs)


# Create engines
engine = _engine_for(config.DATABASE_URL, echo=config.SQL_ECHO)
test_engine = _engine_for(config.TEST_DATABASE_URL)

# Create session factories
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


# Enable foreign key constraints for SQLite
@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable foreign key constraints for SQLite connections."""
    if "sqlite" in str(dbapi_connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_tables():
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)


def create_test_tables():
    """Create all test database tables."""
    Base.metadata.create_all(bind=test_engine)


def drop_test_tables():
    """Drop all test database tables."""
    Base.metadata.drop_all(bind=test_engine)


# PUBLIC_INTERFACE
def get_db() -> Generator[Session, None, None]:
    """
    Dependency to get database session.

    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


class DatabaseManager:
    """Database management utilities."""

    @staticmethod
    def init_db():
        """Initialize the database with tables."""
        create_tables()
