#!/usr/bin/env python3
"""
Database Initialization Script
Create the documents and email_permissions tables
"""

import asyncio
import sys

from docgate.core.config import settings
from docgate.core.logging import setup_logging, get_logger
from docgate.db.session import close_db, create_tables, init_db
from docgate.db import session as db_session

setup_logging()
logger = get_logger(__name__)


async def main():
    """Main initialization function"""
    logger.info("Initializing database...")

    try:
        await init_db(settings)
        if settings.ENVIRONMENT != "development":
            await create_tables(db_session.engine)
        logger.info("Database initialized successfully!")
        return 0
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        return 1
    finally:
        await close_db()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
