"""
Pydantic schemas for Trip and Member entities.
"""
from pydantic import BaseModel
from typing import List
from datetime import datetime
from decimal import Decimal


class TripCreate(BaseModel):
    """Schema for trip creation with its initial roster."""
    title: str
    member_names: List[str]


class TripUpdate(BaseModel):
    """Schema for trip update."""
    title: str


class MemberResponse(BaseModel):
    """Schema for member response."""
    id: str
    trip_id: str
    name: str
    created_at: datetime

    class Config:
        from_attributes = True


class TripResponse(BaseModel):
    """Schema for trip response."""
    id: str
    title: str
    member_count: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TripSummaryResponse(TripResponse):
    """Trip with expense totals, as listed on the dashboard."""
    total_expense: Decimal
    per_head_expense: Decimal


class TripDetailResponse(TripResponse):
    """Schema for detailed trip response with members."""
    members: List[MemberResponse] = []
