"""
Authentication service: registration, login and bearer token verification.
"""
import logging
from typing import Optional
from datetime import timedelta
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from expense_tracker.core.config import Settings
from expense_tracker.core.exceptions import AuthError, ConflictError, ServerError, ValidationError
from expense_tracker.core.security import (
    create_access_token, decode_access_token, get_password_hash, verify_password
)
from expense_tracker.models.user import User
from expense_tracker.schemas.user import Identity, UserResponse

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def issue_token(user: User, settings: Settings) -> str:
    """Sign a token carrying the user's id and email."""
    return create_access_token(
        data={"userId": user.id, "email": user.email},
        expires_delta=timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS),
        secret_key=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def _auth_payload(message: str, user: User, settings: Settings) -> dict:
    return {
        "message": message,
        "token": issue_token(user, settings),
        "user": UserResponse.model_validate(user),
    }


def register(db: Session, settings: Settings, email: str, password: str, name: str) -> dict:
    """Create a user and return a fresh token with the public user record."""
    if _is_blank(email) or _is_blank(password) or _is_blank(name):
        raise ValidationError("All fields are required")

    existing_user = db.query(User).filter(User.email == email).first()
    if existing_user:
        raise ConflictError("User already exists")

    new_user = User(
        email=email,
        password_hash=get_password_hash(password, rounds=settings.BCRYPT_ROUNDS),
        name=name,
    )
    try:
        db.add(new_user)
        db.commit()
        db.refresh(new_user)
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise ConflictError("User already exists")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Registration error: {e}", exc_info=True)
        raise ServerError("Server error during registration")

    logger.info(f"Registered user {new_user.id}")
    return _auth_payload("User registered successfully", new_user, settings)


def login(db: Session, settings: Settings, email: str, password: str) -> dict:
    """Check credentials and return a fresh token with the public user record."""
    if _is_blank(email) or _is_blank(password):
        raise ValidationError("Email and password are required")

    user = db.query(User).filter(User.email == email).first()
    # Same error for unknown email and wrong password
    if not user or not verify_password(password, user.password_hash):
        raise AuthError(INVALID_CREDENTIALS)

    return _auth_payload("Login successful", user, settings)


def verify(token: Optional[str], settings: Settings) -> Identity:
    """Resolve a bearer token to the caller's identity.

    Raises AuthError 401 when no token is given and 403 when the token does
    not carry a valid signature, expiry and identity claims.
    """
    if not token:
        raise AuthError("Access denied. No token provided.")

    payload = decode_access_token(token, secret_key=settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    if payload is None:
        raise AuthError("Invalid or expired token.", status_code=403)

    user_id = payload.get("userId")
    email = payload.get("email")
    if not isinstance(user_id, int) or not isinstance(email, str):
        raise AuthError("Invalid or expired token.", status_code=403)

    return Identity(user_id=user_id, email=email)
