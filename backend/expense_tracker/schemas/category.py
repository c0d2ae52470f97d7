"""
Pydantic schemas for Category entity.
"""
from pydantic import BaseModel
from typing import Optional


class CategoryResponse(BaseModel):
    """Schema for category response."""
    id: int
    name: str
    icon: Optional[str] = None
    is_default: bool

    class Config:
        from_attributes = True
