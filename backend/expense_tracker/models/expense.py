"""
Expense model for tracking spending.
"""
from sqlalchemy import Column, Numeric, Date, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from expense_tracker.core.utils import utcnow
from expense_tracker.db.base import BaseModel


class Expense(BaseModel):
    """Expense model representing a single spending event owned by one user."""
    __tablename__ = "expenses"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    description = Column(Text, nullable=False, default="")
    date = Column(Date, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="expenses")
    category = relationship("Category", back_populates="expenses")
