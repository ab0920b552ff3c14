"""
Database session management.
"""
import sqlite3
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from tripsplit.core.config import settings
from tripsplit.db.base import Base


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _engine_options() -> dict:
    options = {"echo": settings.DB_ECHO, "pool_pre_ping": True}
    if settings.DATABASE_URL.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_recycle"] = 3600
    if settings.DB_ISOLATION_LEVEL:
        options["isolation_level"] = settings.DB_ISOLATION_LEVEL
    return options


engine = create_engine(settings.DATABASE_URL, **_engine_options())

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = None):
    """Initialize database tables."""
    import tripsplit.models  # noqa: F401  registers every table on Base.metadata
    Base.metadata.create_all(bind=bind or engine)
