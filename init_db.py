"""
Database initialization script.
This script pings MongoDB and creates the indexes the API relies on.
Run this as: python init_db.py
"""

import logging
import sys
from pathlib import Path

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("db-init")

# Add current directory to path to ensure imports work
sys.path.append(str(Path(__file__).parent))

from forumflow.core.config import settings
from forumflow.db.base import ALL_COLLECTIONS
from forumflow.db.init_db import create_indexes
from forumflow.db.session import MongoGateway

def init_db(gateway: MongoGateway) -> bool:
    """Initialize the database by ensuring all indexes."""
    logger.info(f"Initializing database: {gateway.db_name}")

    try:
        db = gateway.connect()
        existing = set(db.list_collection_names())
        logger.info(f"Existing collections: {sorted(existing)}")

        create_indexes(db)

        new_collections = set(ALL_COLLECTIONS) - existing
        if new_collections:
            logger.info(f"Collections created on first index: {sorted(new_collections)}")
        return True
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        return False
    finally:
        gateway.close()

if __name__ == "__main__":
    logger.info("Starting database initialization")
    success = init_db(MongoGateway(uri=settings.mongodb_uri, db_name=settings.DB_NAME))
    if success:
        logger.info("Database initialization completed successfully")
    else:
        logger.error("Database initialization failed")
        sys.exit(1)
