"""
Category model for grouping expenses.
"""
from sqlalchemy import Column, String, Boolean, Integer
from sqlalchemy.orm import relationship
from expense_tracker.db.base import Base


class Category(Base):
    """Spending category from the global catalog."""
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    icon = Column(String(50), nullable=True)
    is_default = Column(Boolean, default=False, nullable=False)

    expenses = relationship("Expense", back_populates="category")
