"""
Declarative base and shared column mixins.
"""
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


# MySQL DATETIME drops fractional seconds unless fsp is given.
Timestamp = DateTime(timezone=True).with_variant(mysql.DATETIME(fsp=6), "mysql")


class BaseModel(Base):
    """Abstract base with a UUID primary key and creation timestamp."""
    __abstract__ = True

    id = Column(String(36), primary_key=True, default=new_id)
    created_at = Column(Timestamp, default=utcnow, nullable=False, index=True)


class TimestampMixin:
    """Adds ``updated_at``, re-stamped on every UPDATE issued for the row."""

    updated_at = Column(Timestamp, default=utcnow, onupdate=utcnow, nullable=False)
