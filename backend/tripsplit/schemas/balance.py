"""
Pydantic schemas for trip balances.

Amounts are rounded to cents (half-up) when these are built; the balance
engine itself never rounds.
"""
from pydantic import BaseModel
from typing import List
from decimal import Decimal


class MemberBalanceResponse(BaseModel):
    """One member's paid amount, equal share and net balance."""
    member_id: str
    member_name: str
    total_paid: Decimal
    should_pay: Decimal
    balance: Decimal  # positive: the group owes this member


class LedgerResponse(BaseModel):
    """Schema for a trip's balance sheet."""
    trip_id: str
    title: str
    member_count: int
    total_expense: Decimal
    per_head_expense: Decimal
    balances: List[MemberBalanceResponse]
