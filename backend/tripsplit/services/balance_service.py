"""
Balance computation for a trip's equal split.

Pure functions over already-loaded rows; nothing here touches the database
and nothing is cached. Amounts stay unrounded Decimals; rounding to cents
happens only when responses are serialized.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Sequence
from tripsplit.models.trip import Trip, Member
from tripsplit.models.expense import Expense

ZERO = Decimal("0")


@dataclass(frozen=True)
class MemberBalance:
    """One member's position: positive balance means the group owes them."""
    member: Member
    total_paid: Decimal
    should_pay: Decimal
    balance: Decimal


@dataclass(frozen=True)
class LedgerSummary:
    """Totals and per-member balances of one trip."""
    trip: Trip
    total_expense: Decimal
    per_head_expense: Decimal
    balances: List[MemberBalance]


def total_expense(expenses: Sequence[Expense]) -> Decimal:
    return sum((Decimal(expense.amount) for expense in expenses), ZERO)


def per_head(total: Decimal, member_count: int) -> Decimal:
    """Equal share of ``total``; 0 for a trip without members."""
    if member_count > 0:
        return total / member_count
    return ZERO


def compute_balances(
    trip: Trip,
    members: Sequence[Member],
    expenses: Sequence[Expense]
) -> List[MemberBalance]:
    """
    Compute paid / should-pay / balance for every member.

    Every member owes the same share, ``total / trip.member_count``. The
    result keeps the order of ``members``.
    """
    should_pay = per_head(total_expense(expenses), trip.member_count)

    paid_by = {}
    for expense in expenses:
        paid_by[expense.paid_by_member_id] = (
            paid_by.get(expense.paid_by_member_id, ZERO) + Decimal(expense.amount)
        )

    balances = []
    for member in members:
        total_paid = paid_by.get(member.id, ZERO)
        balances.append(MemberBalance(
            member=member,
            total_paid=total_paid,
            should_pay=should_pay,
            balance=total_paid - should_pay
        ))
    return balances


def summarize_ledger(
    trip: Trip,
    members: Sequence[Member],
    expenses: Sequence[Expense]
) -> LedgerSummary:
    """Trip totals plus the per-member balances."""
    total = total_expense(expenses)
    return LedgerSummary(
        trip=trip,
        total_expense=total,
        per_head_expense=per_head(total, trip.member_count),
        balances=compute_balances(trip, members, expenses)
    )
