"""Database configuration and session management."""

import os

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

# Get database URL from environment
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./workout_log.db")
DATABASE_ECHO = os.environ.get("DATABASE_ECHO", "").lower() in ("1", "true", "yes")

# SQLite connections are shared with FastAPI's threadpool
connect_args = (
    {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
)

# Create SQLAlchemy engine
engine = create_engine(DATABASE_URL, echo=DATABASE_ECHO, connect_args=connect_args)

# Create SessionLocal class for database sessions
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for declarative models
Base = declarative_base()


@event.listens_for(Engine, "connect")
def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """Turn on foreign key enforcement for SQLite connections."""
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def init_db(bind: Engine = engine) -> None:
    """Create all tables that don't exist yet."""
    # Import models so they register on Base.metadata
    import models  # noqa: F401

    Base.metadata.create_all(bind=bind)


def get_db():
    """Dependency function that provides a database session.

    Yields a database session and ensures it's closed after use.
    Use with FastAPI's Depends().
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
