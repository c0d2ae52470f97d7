"""
Category catalog service: default seed set and listing.
"""
import logging
from typing import List
from sqlalchemy import func
from sqlalchemy.orm import Session
from expense_tracker.models.category import Category

logger = logging.getLogger(__name__)

# Seeded in this order when the catalog is empty
DEFAULT_CATEGORIES = [
    ("Food & Dining", "🍔"),
    ("Transportation", "🚗"),
    ("Shopping", "🛍️"),
    ("Entertainment", "🎬"),
    ("Bills & Utilities", "💡"),
    ("Healthcare", "⚕️"),
    ("Education", "📚"),
    ("Other", "📦"),
]


def seed_default_categories(db: Session) -> int:
    """
    Insert the default categories if the catalog is empty.

    Returns:
        Number of categories inserted (0 when the catalog already had rows)
    """
    existing = db.query(func.count(Category.id)).scalar() or 0
    if existing:
        logger.debug(f"Category catalog already has {existing} rows, skipping seed")
        return 0

    db.add_all([
        Category(name=name, icon=icon, is_default=True)
        for name, icon in DEFAULT_CATEGORIES
    ])
    db.commit()
    logger.info(f"Seeded {len(DEFAULT_CATEGORIES)} default categories")
    return len(DEFAULT_CATEGORIES)


def list_categories(db: Session) -> List[Category]:
    """All categories sorted by name."""
    return db.query(Category).order_by(Category.name, Category.id).all()


def category_exists(db: Session, category_id: int) -> bool:
    return db.query(Category.id).filter(Category.id == category_id).first() is not None
