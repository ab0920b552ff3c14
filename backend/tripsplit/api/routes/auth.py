"""
Authentication routes for signup and login.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from tripsplit.db.session import get_db
from tripsplit.schemas.user import UserCreate, UserLogin, Token, UserResponse
from tripsplit.core.security import create_access_token
from tripsplit.services.user_service import register_user, authenticate
from tripsplit.api.routes.users import to_user_response

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user."""
    user = register_user(
        username=user_data.username,
        email=user_data.email,
        password=user_data.password,
        name=user_data.name,
        db=db
    )
    return to_user_response(user)


@router.post("/login", response_model=Token)
async def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Login and get JWT token."""
    user = authenticate(credentials.username, credentials.password, db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password"
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive"
        )

    return {"access_token": create_access_token(user.id), "token_type": "bearer"}
