"""
Declarative base and shared model columns.
"""
from sqlalchemy import Column, Integer, DateTime
from sqlalchemy.orm import declarative_base
from expense_tracker.core.utils import utcnow

Base = declarative_base()


class BaseModel(Base):
    """Abstract base with integer primary key and creation timestamp."""
    __abstract__ = True

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
