"""
User profile routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from tripsplit.db.session import get_db
from tripsplit.schemas.user import UserResponse, ProfileUpdate
from tripsplit.models.user import User
from tripsplit.api.dependencies import get_current_user
from tripsplit.services.user_service import DEFAULT_PROFILE_NAME, update_profile_name

router = APIRouter(prefix="/users", tags=["users"])


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        name=user.profile.name if user.profile else DEFAULT_PROFILE_NAME,
        is_active=user.is_active,
        created_at=user.created_at
    )


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return to_user_response(current_user)


@router.patch("/me", response_model=UserResponse)
async def update_current_user(
    profile_data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update the current user's display name."""
    update_profile_name(current_user, profile_data.name, db)
    db.refresh(current_user)
    return to_user_response(current_user)
