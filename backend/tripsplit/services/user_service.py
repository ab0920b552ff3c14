"""
User registration and profile updates.
"""
import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from tripsplit.core.exceptions import ConflictError, ValidationError
from tripsplit.core.security import get_password_hash, verify_password
from tripsplit.models.user import User, Profile

logger = logging.getLogger(__name__)

DEFAULT_PROFILE_NAME = "User"


def register_user(
    username: str,
    email: str,
    password: str,
    name: Optional[str] = None,
    db: Session = None
) -> User:
    """Create a user and its profile in one transaction."""
    if db.query(User).filter(User.username == username).first():
        raise ConflictError("Username already exists")
    if db.query(User).filter(User.email == email).first():
        raise ConflictError("Email already exists")

    user = User(
        username=username,
        email=email,
        hashed_password=get_password_hash(password)
    )
    user.profile = Profile(name=(name or "").strip() or DEFAULT_PROFILE_NAME)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Username or email already exists")
    db.refresh(user)

    logger.info(f"Registered user {user.id}")
    return user


def authenticate(username: str, password: str, db: Session) -> Optional[User]:
    """Return the user if the credentials match, else None."""
    user = db.query(User).filter(User.username == username).first()
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user


def update_profile_name(user: User, name: str, db: Session) -> Profile:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Name is required")
    profile = user.profile
    if profile is None:
        profile = Profile(user_id=user.id, name=name)
        db.add(profile)
    else:
        profile.name = name
    db.commit()
    db.refresh(profile)
    return profile
