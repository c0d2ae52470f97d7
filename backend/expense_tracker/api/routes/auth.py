"""
Authentication routes for registration and login.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from expense_tracker.core.config import Settings
from expense_tracker.db.session import get_db
from expense_tracker.schemas.user import AuthResponse, UserCreate, UserLogin
from expense_tracker.services import auth_service
from expense_tracker.api.dependencies import get_settings

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Register a new user and return a session token."""
    return auth_service.register(
        db, settings,
        email=user_data.email,
        password=user_data.password,
        name=user_data.name
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Login and get JWT token."""
    return auth_service.login(
        db, settings,
        email=credentials.email,
        password=credentials.password
    )
