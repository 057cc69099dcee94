#!/usr/bin/env python3
"""
Seed Data Script
Create a demo document and grant it to a demo email
"""

import asyncio
import sys

from docgate.core.config import settings
from docgate.core.exceptions import AlreadyGrantedException
from docgate.core.logging import setup_logging, get_logger
from docgate.db.session import close_db, init_db
from docgate.services.access import AdminService
from docgate.services.store import SQLPermissionStore

setup_logging()
logger = get_logger(__name__)

DEMO_EMAIL = "reader@example.com"
DEMO_TITLE = "Getting Started Guide"


async def seed_demo_grant(service: AdminService):
    """Create the demo document unless present, then grant it"""
    documents = await service.list_documents()
    document = next((d for d in documents if d.title == DEMO_TITLE), None)

    if document is None:
        document = await service.create_document(
            title=DEMO_TITLE,
            introduction="A short tour of the material shared with you.",
            link="https://example.com/docs/getting-started",
            thank_you_content="Thank you for your interest! Enjoy the guide.",
        )
        logger.info(f"Created document: {document.title} ({document.id})")
    else:
        logger.info("Demo document already exists")

    try:
        await service.grant_permission(DEMO_EMAIL, document.id)
        logger.info(f"Granted '{document.title}' to {DEMO_EMAIL}")
    except AlreadyGrantedException:
        logger.info(f"{DEMO_EMAIL} already has access")


async def main():
    """Main seeding function"""
    logger.info("Seeding database...")

    try:
        session_maker = await init_db(settings)
        store = SQLPermissionStore(session_maker, timeout=settings.STORE_TIMEOUT_SECONDS)
        await seed_demo_grant(AdminService(store))
        logger.info("Database seeded successfully!")
        return 0
    except Exception as e:
        logger.error(f"Failed to seed database: {e}")
        return 1
    finally:
        await close_db()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
