"""
Trip model for group expense sharing.
"""
from sqlalchemy import Column, String, Integer, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from tripsplit.db.base import BaseModel, TimestampMixin


class Trip(TimestampMixin, BaseModel):
    """
    Trip owned by exactly one user.

    ``member_count`` mirrors the number of members and is fixed when the trip
    is created together with its roster.
    """
    __tablename__ = "trips"
    __table_args__ = (
        UniqueConstraint("owner_id", "title", name="uq_trips_owner_title"),
        CheckConstraint("member_count >= 0", name="ck_trips_member_count"),
    )

    owner_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    member_count = Column(Integer, nullable=False)

    # Relationships
    owner = relationship("User", back_populates="trips")
    members = relationship(
        "Member", back_populates="trip", cascade="all, delete-orphan", order_by="Member.name"
    )
    expenses = relationship("Expense", back_populates="trip", cascade="all, delete-orphan")


class Member(BaseModel):
    """Participant in a trip's split. Not an authenticated identity."""
    __tablename__ = "trip_members"

    trip_id = Column(String(36), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)

    # Relationships
    trip = relationship("Trip", back_populates="members")
    expenses_paid = relationship("Expense", back_populates="payer", cascade="all, delete-orphan")
