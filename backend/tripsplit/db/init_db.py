"""
Database initialization script.

    python -m tripsplit.db.init_db
"""
import logging
from tripsplit.db.session import init_db

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    logger.info("Initializing database...")
    init_db()
    logger.info("Database initialized successfully!")
