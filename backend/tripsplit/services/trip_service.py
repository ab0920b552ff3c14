"""
Read paths over a user's trips. Every query goes through the ownership policy.
"""
from decimal import Decimal
from typing import List, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload
from tripsplit.models.trip import Trip, Member
from tripsplit.models.expense import Expense
from tripsplit.services import policy
from tripsplit.services.balance_service import LedgerSummary, per_head, summarize_ledger


def list_trips(owner_id: str, db: Session) -> List[Trip]:
    """Trips of the owner, newest first."""
    return policy.scoped_trips(db, owner_id).order_by(Trip.created_at.desc()).all()


def list_trips_with_totals(owner_id: str, db: Session) -> List[Tuple[Trip, Decimal, Decimal]]:
    """Dashboard rows: (trip, total expense, per-head expense), newest trip first."""
    trips = list_trips(owner_id, db)
    totals = dict(
        policy.scoped_expenses(db, owner_id)
        .with_entities(Expense.trip_id, func.sum(Expense.amount))
        .group_by(Expense.trip_id)
        .all()
    )
    rows = []
    for trip in trips:
        total = Decimal(totals.get(trip.id) or 0)
        rows.append((trip, total, per_head(total, trip.member_count)))
    return rows


def get_trip(trip_id: str, owner_id: str, db: Session) -> Trip:
    return policy.get_owned_trip(db, trip_id, owner_id)


def list_members(trip_id: str, owner_id: str, db: Session) -> List[Member]:
    """Members of the trip ordered by name."""
    policy.get_owned_trip(db, trip_id, owner_id)
    return (
        policy.scoped_members(db, owner_id)
        .filter(Member.trip_id == trip_id)
        .order_by(Member.name.asc(), Member.created_at.asc())
        .all()
    )


def list_expenses(trip_id: str, owner_id: str, db: Session) -> List[Expense]:
    """Expenses of the trip, newest first, with the payer loaded."""
    policy.get_owned_trip(db, trip_id, owner_id)
    return (
        policy.scoped_expenses(db, owner_id)
        .options(joinedload(Expense.payer))
        .filter(Expense.trip_id == trip_id)
        .order_by(Expense.created_at.desc())
        .all()
    )


def get_ledger(trip_id: str, owner_id: str, db: Session) -> LedgerSummary:
    """
    Load trip, members and expenses and compute balances.

    The three reads run in the session's single open transaction, so with a
    REPEATABLE READ engine they see one snapshot.
    """
    trip = get_trip(trip_id, owner_id, db)
    members = list_members(trip_id, owner_id, db)
    expenses = list_expenses(trip_id, owner_id, db)
    return summarize_ledger(trip, members, expenses)
