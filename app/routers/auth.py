import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse, UserUpdate
from app.core.security import verify_password, create_access_token
from app.repos.user_repo import (
    get_by_email,
    create as create_user,
    update as update_user,
)
from app.models.user import User

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def _user_to_response(user: User) -> AuthResponse:
    token = create_access_token(user.id, user.name)
    return AuthResponse(
        user=UserResponse(
            email=user.email,
            last_name=user.last_name,
            location=user.location,
            name=user.name,
            token=token,
        )
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(data: UserRegister, db: Session = Depends(get_db)):
    try:
        if get_by_email(db, data.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Please provide a unique email",
            )
        user = create_user(db, data.name, data.email, data.password)
        logger.info("User registered: %s", user.email)
        return _user_to_response(user)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Register failed for email=%s: %s", data.email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Registration failed") from e


@router.post("/login", response_model=AuthResponse)
def login(data: UserLogin, db: Session = Depends(get_db)):
    if not data.email or not data.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please provide email and password",
        )
    try:
        user = get_by_email(db, data.email)
        if not user or not verify_password(data.password, user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid Credentials",
            )
        logger.info("User logged in: %s", user.email)
        return _user_to_response(user)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Login failed for email=%s: %s", data.email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Login failed") from e


@router.patch("/updateUser", response_model=AuthResponse)
def update_profile(
    data: UserUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Replace email, name, last name and location. A fresh token is issued since the name is embedded in it."""
    if not data.email or not data.name or not data.last_name or not data.location:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please provide all values",
        )
    try:
        if data.email != user.email and get_by_email(db, data.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Please provide a unique email",
            )
        updated = update_user(
            db,
            user.id,
            email=data.email,
            name=data.name,
            last_name=data.last_name,
            location=data.location,
        )
        logger.info("User profile updated: %s", user.id)
        return _user_to_response(updated)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Profile update failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update profile") from e
