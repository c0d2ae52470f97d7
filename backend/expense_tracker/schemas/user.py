"""
Pydantic schemas for User entity and authentication.
"""
from pydantic import BaseModel
from typing import Optional


class UserCreate(BaseModel):
    """Schema for registration. Fields are optional so missing ones map to a 400."""
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None


class UserLogin(BaseModel):
    """Schema for user login."""
    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    """Public user record. Never carries the password hash."""
    id: int
    email: str
    name: str

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    """Schema for register/login response."""
    message: str
    token: str
    user: UserResponse


class Identity(BaseModel):
    """Caller identity decoded from a verified bearer token."""
    user_id: int
    email: str
