"""
Shared route dependencies: settings access and bearer token verification.
"""
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from expense_tracker.core.config import Settings
from expense_tracker.schemas.user import Identity
from expense_tracker.services import auth_service

# auto_error=False so a missing header reaches verify() and answers 401
bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings)
) -> Identity:
    """Identity of the caller, from the ``Authorization: Bearer`` header."""
    token = credentials.credentials if credentials else None
    return auth_service.verify(token, settings)
