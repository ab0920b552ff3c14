"""
Expense routes. Expenses are append-only: there is no update or delete.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from tripsplit.db.session import get_db
from tripsplit.core.utils import quantize_amount
from tripsplit.models.user import User
from tripsplit.models.expense import Expense
from tripsplit.schemas.expense import ExpenseCreate, ExpenseResponse
from tripsplit.api.dependencies import get_current_user
from tripsplit.services import ledger_service, trip_service

router = APIRouter(prefix="/trips/{trip_id}/expenses", tags=["expenses"])


def to_expense_response(expense: Expense) -> ExpenseResponse:
    return ExpenseResponse(
        id=expense.id,
        trip_id=expense.trip_id,
        title=expense.title,
        amount=quantize_amount(expense.amount),
        paid_by_member_id=expense.paid_by_member_id,
        payer_name=expense.payer.name,
        created_at=expense.created_at,
        updated_at=expense.updated_at
    )


@router.get("", response_model=List[ExpenseResponse])
async def list_expenses(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List a trip's expenses, newest first, with the paying member."""
    expenses = trip_service.list_expenses(trip_id, current_user.id, db)
    return [to_expense_response(expense) for expense in expenses]


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    trip_id: str,
    expense_data: ExpenseCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Record an expense paid by one of the trip's members."""
    expense = ledger_service.add_expense(
        trip_id=trip_id,
        requester_id=current_user.id,
        title=expense_data.title,
        amount=expense_data.amount,
        paid_by_member_id=expense_data.paid_by_member_id,
        db=db
    )
    return to_expense_response(expense)
