"""
Run the API server: ``python -m expense_tracker``.
"""
import logging
import uvicorn
from expense_tracker.core.config import settings
from expense_tracker.main import configure_logging


def main():
    configure_logging(settings)
    logging.getLogger(__name__).info(f"Server running on port {settings.PORT}")
    uvicorn.run("expense_tracker.main:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    main()
