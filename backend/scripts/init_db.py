"""Database initialization script.

Connects to MongoDB and creates the order and order item indexes.

Usage:
    python -m scripts.init_db
"""

import asyncio
import logging

from storefront.database.mongodb import record_store
from storefront.utils.logger import setup_logging

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)


async def init_databases() -> None:
    """Connect to the record store; connecting creates the indexes."""
    try:
        logger.info("Initializing databases...")
        await record_store.connect()
        logger.info("Database initialization completed successfully")

    except Exception as e:
        logger.error("Error initializing databases: %s", e)
        raise

    finally:
        await record_store.disconnect()


if __name__ == "__main__":
    asyncio.run(init_databases())
