"""
Database initialization: create tables and seed the category catalog.
"""
import logging
from expense_tracker.core.config import settings
from expense_tracker.db.session import Database
from expense_tracker.services.category_service import seed_default_categories

# Import all models so SQLAlchemy can register them
from expense_tracker.models import User, Category, Expense  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(database: Database) -> None:
    """Create missing tables, then seed default categories if the catalog is empty."""
    database.create_all()
    with database.session() as db:
        seed_default_categories(db)
    logger.info("Database initialized successfully")


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    print("Initializing database...")
    database = Database.from_settings(settings)
    try:
        init_db(database)
    finally:
        database.dispose()
    print("Database initialized successfully!")
