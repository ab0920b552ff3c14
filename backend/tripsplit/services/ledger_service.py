"""
Ledger mutation service: the only code that creates trips, members and expenses.
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import Iterable, List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from tripsplit.core.config import settings
from tripsplit.core.exceptions import ConflictError, ValidationError
from tripsplit.core.utils import CENT
from tripsplit.models.trip import Trip, Member
from tripsplit.models.expense import Expense
from tripsplit.services.policy import lock_owned_trip, scoped_trips

logger = logging.getLogger(__name__)

# NUMERIC(10, 2)
MAX_AMOUNT = Decimal("99999999.99")


def _clean_title(title: str) -> str:
    title = (title or "").strip()
    if not title:
        raise ValidationError("Title is required")
    if len(title) > settings.MAX_TITLE_LENGTH:
        raise ValidationError(f"Title must be at most {settings.MAX_TITLE_LENGTH} characters")
    return title


def _clean_member_names(member_names: Iterable[str]) -> List[str]:
    if isinstance(member_names, str):
        raise ValidationError("Member names must be a list of names")
    names = [name.strip() for name in member_names or [] if name and name.strip()]
    if not names:
        raise ValidationError("At least one member name is required")
    for name in names:
        if len(name) > settings.MAX_MEMBER_NAME_LENGTH:
            raise ValidationError(
                f"Member name must be at most {settings.MAX_MEMBER_NAME_LENGTH} characters"
            )
    return names


def _clean_amount(amount) -> Decimal:
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError("Amount must be a number")
    if not value.is_finite():
        raise ValidationError("Amount must be a number")
    if value <= 0:
        raise ValidationError("Amount must be greater than zero")
    if value > MAX_AMOUNT:
        raise ValidationError(f"Amount must not exceed {MAX_AMOUNT}")
    if value != value.quantize(CENT):
        raise ValidationError("Amount can have at most 2 decimal places")
    return value.quantize(CENT)


def _title_taken(db: Session, owner_id: str, title: str, exclude_trip_id: str = None) -> bool:
    query = scoped_trips(db, owner_id).filter(Trip.title == title)
    if exclude_trip_id is not None:
        query = query.filter(Trip.id != exclude_trip_id)
    return db.query(query.exists()).scalar()


def create_trip(owner_id: str, title: str, member_names: Iterable[str], db: Session) -> Trip:
    """
    Create a trip together with its member roster in one transaction.

    Blank member names are dropped. ``member_count`` is the number of names
    kept, so it matches the inserted members.
    """
    title = _clean_title(title)
    names = _clean_member_names(member_names)

    if _title_taken(db, owner_id, title):
        logger.warning(f"Trip title '{title}' already used by user {owner_id}")
        raise ConflictError("A trip with this title already exists")

    trip = Trip(owner_id=owner_id, title=title, member_count=len(names))
    trip.members = [Member(name=name) for name in names]
    db.add(trip)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(f"Concurrent insert of trip title '{title}' for user {owner_id}")
        raise ConflictError("A trip with this title already exists")
    db.refresh(trip)

    logger.info(f"Created trip {trip.id} with {trip.member_count} members for user {owner_id}")
    return trip


def add_expense(
    trip_id: str,
    requester_id: str,
    title: str,
    amount,
    paid_by_member_id: str,
    db: Session
) -> Expense:
    """Record a payment by a member of the trip. ``member_count`` is untouched."""
    trip = lock_owned_trip(db, trip_id, requester_id)
    try:
        title = _clean_title(title)
        value = _clean_amount(amount)
        payer = db.query(Member).filter(
            Member.id == paid_by_member_id,
            Member.trip_id == trip.id
        ).first()
        if payer is None:
            raise ValidationError("Payer must be a member of this trip")
    except ValidationError:
        db.rollback()
        raise

    expense = Expense(
        trip_id=trip.id,
        title=title,
        amount=value,
        paid_by_member_id=payer.id
    )
    db.add(expense)
    db.commit()
    db.refresh(expense)

    logger.info(f"Added expense {expense.id} of {value} to trip {trip.id}")
    return expense


def rename_trip(trip_id: str, requester_id: str, title: str, db: Session) -> Trip:
    """Change a trip's title; ``updated_at`` is re-stamped by the column hook."""
    trip = lock_owned_trip(db, trip_id, requester_id)
    try:
        title = _clean_title(title)
        if title != trip.title and _title_taken(db, requester_id, title, exclude_trip_id=trip.id):
            raise ConflictError("A trip with this title already exists")
    except (ValidationError, ConflictError):
        db.rollback()
        raise

    if title == trip.title:
        db.rollback()
        return trip

    trip.title = title
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("A trip with this title already exists")
    db.refresh(trip)

    logger.info(f"Renamed trip {trip.id}")
    return trip


def delete_trip(trip_id: str, requester_id: str, db: Session) -> None:
    """Delete a trip with all of its members and expenses."""
    trip = lock_owned_trip(db, trip_id, requester_id)
    db.delete(trip)
    db.commit()
    logger.info(f"Deleted trip {trip_id} for user {requester_id}")
