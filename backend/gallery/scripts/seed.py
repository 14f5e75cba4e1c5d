"""Seed Script: bootstrap admin account, share link setting and sample invitations.

Usage:
    python -m gallery.scripts.seed

Invariants:
    - Idempotent: the admin is created only if absent, sample invitations only
      when the table is empty; the share link setting is always upserted
    - Sample invitations point at /api/sample-images/<type>, which image cleanup never deletes
"""

import asyncio
import logging
import sys

from gallery.config import Settings, get_settings
from gallery.core.domain_types import SAMPLE_IMAGE_URL_PREFIX, SettingKey
from gallery.core.passwords import hash_password
from gallery.core.repository_protocols import Storage
from gallery.infrastructure.database import init_db
from gallery.infrastructure.observability import setup_logging
from gallery.infrastructure.storage import DatabaseStorage

logger = logging.getLogger(__name__)

SAMPLE_INVITATIONS = [
    {
        "title": "Elegant Wedding Invitation",
        "description": (
            "A beautiful wedding invitation featuring soft pastel pink and gold accents "
            "with delicate floral borders. Perfect for romantic and sophisticated celebrations."
        ),
        "price": 45,
        "image_url": SAMPLE_IMAGE_URL_PREFIX + "wedding",
    },
    {
        "title": "Modern Birthday Party",
        "description": (
            "Contemporary birthday invitation with bold geometric shapes in teal and coral "
            "colors. Vibrant, fun, and perfect for modern celebrations."
        ),
        "price": 25,
        "image_url": SAMPLE_IMAGE_URL_PREFIX + "birthday",
    },
    {
        "title": "Luxurious Corporate Event",
        "description": (
            "Sophisticated corporate invitation with deep navy blue and metallic gold color "
            "scheme. Features elegant Art Deco patterns for premium business events."
        ),
        "price": 65,
        "image_url": SAMPLE_IMAGE_URL_PREFIX + "corporate",
    },
    {
        "title": "Rustic Outdoor Wedding",
        "description": (
            "Charming outdoor wedding invitation with earthy tones and watercolor "
            "wildflowers. Perfect for natural, organic celebrations."
        ),
        "price": 40,
        "image_url": SAMPLE_IMAGE_URL_PREFIX + "rustic",
    },
    {
        "title": "Sweet Baby Shower",
        "description": (
            "Whimsical baby shower invitation featuring soft pastels and cute illustrated "
            "animals. Cheerful and sweet design for welcoming new arrivals."
        ),
        "price": 30,
        "image_url": SAMPLE_IMAGE_URL_PREFIX + "baby-shower",
    },
    {
        "title": "Black Tie Gala",
        "description": (
            "Elegant formal invitation with sophisticated black and champagne gold palette. "
            "Features ornate Victorian scrollwork for upscale events."
        ),
        "price": 75,
        "image_url": SAMPLE_IMAGE_URL_PREFIX + "gala",
    },
]


async def seed_database(storage: Storage, settings: Settings) -> dict:
    """Apply seed data through the storage layer. Returns what was created."""
    report = {"admin_created": False, "invitations_created": 0}

    if await storage.get_admin_user_by_username(settings.seed_admin_username) is None:
        await storage.create_admin_user(
            settings.seed_admin_username,
            hash_password(settings.seed_admin_password, settings.bcrypt_rounds),
        )
        report["admin_created"] = True
        logger.info(f"Created admin user '{settings.seed_admin_username}'")
    else:
        logger.info("Admin user already exists")

    await storage.upsert_setting(SettingKey.TELEGRAM_LINK.value, settings.default_share_link)
    logger.info("Saved default share link setting")

    if not await storage.list_invitations():
        for values in SAMPLE_INVITATIONS:
            await storage.create_invitation(dict(values))
        report["invitations_created"] = len(SAMPLE_INVITATIONS)
        logger.info(f"Created {len(SAMPLE_INVITATIONS)} sample invitations")
    else:
        logger.info("Sample invitations already exist")

    return report


async def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(settings.database_url)
    try:
        if settings.database_url.startswith("sqlite"):
            await manager.create_all()
        async with manager.session() as db:
            await seed_database(DatabaseStorage(db), settings)
        logger.info("Database seed completed")
    finally:
        await manager.dispose()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except Exception:
        logger.exception("Seed failed")
        sys.exit(1)
