"""
Category catalog routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from expense_tracker.db.session import get_db
from expense_tracker.schemas.category import CategoryResponse
from expense_tracker.schemas.user import Identity
from expense_tracker.services.category_service import list_categories
from expense_tracker.api.dependencies import get_current_user

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=List[CategoryResponse])
async def get_categories(
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List all categories sorted by name."""
    return list_categories(db)
