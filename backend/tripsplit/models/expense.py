"""
Expense model for tracking spending.
"""
from sqlalchemy import Column, String, Numeric, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from tripsplit.db.base import BaseModel, TimestampMixin


class Expense(TimestampMixin, BaseModel):
    """A single payment made by one member on behalf of the trip."""
    __tablename__ = "expenses"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_expenses_amount_positive"),
    )

    trip_id = Column(String(36), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    paid_by_member_id = Column(
        String(36), ForeignKey("trip_members.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Relationships
    trip = relationship("Trip", back_populates="expenses")
    payer = relationship("Member", back_populates="expenses_paid")
