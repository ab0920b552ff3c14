"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel
from datetime import datetime
from decimal import Decimal


class ExpenseCreate(BaseModel):
    """Schema for expense creation."""
    title: str
    amount: Decimal
    paid_by_member_id: str


class ExpenseResponse(BaseModel):
    """Schema for expense response, joined with the paying member."""
    id: str
    trip_id: str
    title: str
    amount: Decimal
    paid_by_member_id: str
    payer_name: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
