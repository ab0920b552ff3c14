"""
Trip management routes.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List
from tripsplit.db.session import get_db
from tripsplit.core.utils import quantize_amount
from tripsplit.models.user import User
from tripsplit.schemas.trip import (
    TripCreate, TripUpdate, TripResponse, TripSummaryResponse,
    TripDetailResponse, MemberResponse
)
from tripsplit.schemas.balance import LedgerResponse, MemberBalanceResponse
from tripsplit.api.dependencies import get_current_user
from tripsplit.services import ledger_service, trip_service

router = APIRouter(prefix="/trips", tags=["trips"])


@router.post("", response_model=TripDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a trip together with its members."""
    trip = ledger_service.create_trip(current_user.id, trip_data.title, trip_data.member_names, db)
    return trip


@router.get("", response_model=List[TripSummaryResponse])
async def list_trips(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the current user's trips, newest first, with expense totals."""
    return [
        TripSummaryResponse(
            id=trip.id,
            title=trip.title,
            member_count=trip.member_count,
            created_at=trip.created_at,
            updated_at=trip.updated_at,
            total_expense=quantize_amount(total),
            per_head_expense=quantize_amount(per_head)
        )
        for trip, total, per_head in trip_service.list_trips_with_totals(current_user.id, db)
    ]


@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_trip(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get trip details with members."""
    trip = trip_service.get_trip(trip_id, current_user.id, db)
    members = trip_service.list_members(trip_id, current_user.id, db)
    return TripDetailResponse(
        id=trip.id,
        title=trip.title,
        member_count=trip.member_count,
        created_at=trip.created_at,
        updated_at=trip.updated_at,
        members=[MemberResponse.model_validate(m) for m in members]
    )


@router.patch("/{trip_id}", response_model=TripResponse)
async def rename_trip(
    trip_id: str,
    trip_data: TripUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Rename a trip."""
    return ledger_service.rename_trip(trip_id, current_user.id, trip_data.title, db)


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trip(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a trip with its members and expenses."""
    ledger_service.delete_trip(trip_id, current_user.id, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{trip_id}/members", response_model=List[MemberResponse])
async def get_members(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get members ordered by name."""
    return trip_service.list_members(trip_id, current_user.id, db)


@router.get("/{trip_id}/balances", response_model=LedgerResponse)
async def get_balances(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get totals and each member's paid / should-pay / balance."""
    ledger = trip_service.get_ledger(trip_id, current_user.id, db)
    return LedgerResponse(
        trip_id=ledger.trip.id,
        title=ledger.trip.title,
        member_count=ledger.trip.member_count,
        total_expense=quantize_amount(ledger.total_expense),
        per_head_expense=quantize_amount(ledger.per_head_expense),
        balances=[
            MemberBalanceResponse(
                member_id=row.member.id,
                member_name=row.member.name,
                total_paid=quantize_amount(row.total_paid),
                should_pay=quantize_amount(row.should_pay),
                balance=quantize_amount(row.balance)
            )
            for row in ledger.balances
        ]
    )
