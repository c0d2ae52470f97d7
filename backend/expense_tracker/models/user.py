"""
User model for authentication.
"""
from sqlalchemy import Column, String
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import relationship
from expense_tracker.db.base import BaseModel

# MySQL's default collation compares case-insensitively; emails match exactly as stored
EMAIL_TYPE = String(255).with_variant(mysql.VARCHAR(255, collation="utf8mb4_bin"), "mysql")


class User(BaseModel):
    """Registered user. Email is unique and compared exactly as stored."""
    __tablename__ = "users"

    email = Column(EMAIL_TYPE, unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)

    # Relationships
    expenses = relationship(
        "Expense",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
