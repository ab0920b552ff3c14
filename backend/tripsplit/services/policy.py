"""
Ownership policy applied to every trip, member and expense query.

A trip is visible to its owner only. Members and expenses inherit visibility
from their parent trip, so every query for them joins back to ``trips`` and
filters on ``Trip.owner_id``. Services must obtain rows through these
builders; querying the models directly skips the check.
"""
import logging
from sqlalchemy.orm import Query, Session
from tripsplit.core.exceptions import AuthorizationError, NotFoundError
from tripsplit.models.trip import Trip, Member
from tripsplit.models.expense import Expense

logger = logging.getLogger(__name__)

TRIP_NOT_FOUND = "Trip not found"


def owns_trip(owner_id: str):
    """SQL predicate: the trip row belongs to ``owner_id``."""
    return Trip.owner_id == owner_id


def scoped_trips(db: Session, owner_id: str) -> Query:
    """Trips visible to ``owner_id``."""
    return db.query(Trip).filter(owns_trip(owner_id))


def scoped_members(db: Session, owner_id: str) -> Query:
    """Members whose trip is visible to ``owner_id``."""
    return db.query(Member).join(Trip, Member.trip_id == Trip.id).filter(owns_trip(owner_id))


def scoped_expenses(db: Session, owner_id: str) -> Query:
    """Expenses whose trip is visible to ``owner_id``."""
    return db.query(Expense).join(Trip, Expense.trip_id == Trip.id).filter(owns_trip(owner_id))


def get_owned_trip(db: Session, trip_id: str, owner_id: str) -> Trip:
    """Load a trip for reading. Missing and foreign trips both raise NotFoundError."""
    trip = scoped_trips(db, owner_id).filter(Trip.id == trip_id).first()
    if trip is None:
        raise NotFoundError(TRIP_NOT_FOUND)
    return trip


def lock_owned_trip(db: Session, trip_id: str, owner_id: str) -> Trip:
    """
    Load and row-lock a trip before mutating it or its children.

    The lock is held until the caller's transaction ends, so the ownership
    check and the write commit together.
    """
    trip = (
        scoped_trips(db, owner_id)
        .filter(Trip.id == trip_id)
        .with_for_update()
        .first()
    )
    if trip is None:
        logger.warning(f"Denied write on trip {trip_id} for user {owner_id}")
        raise AuthorizationError(TRIP_NOT_FOUND)
    return trip
