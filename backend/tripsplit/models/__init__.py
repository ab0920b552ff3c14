"""Models package - Import all models for SQLAlchemy registration."""
from tripsplit.models.user import User, Profile
from tripsplit.models.trip import Trip, Member
from tripsplit.models.expense import Expense

__all__ = [
    "User",
    "Profile",
    "Trip",
    "Member",
    "Expense",
]
