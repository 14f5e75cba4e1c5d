"""Seed Script: admin account, share link setting and sample invitations.

Invariants:
    - A second run creates nothing new
    - The seeded admin can log in with the configured password
    - Sample invitations use /api/sample-images/ URLs
"""

from gallery.config import Settings
from gallery.core.domain_types import SAMPLE_IMAGE_URL_PREFIX, SAMPLE_IMAGES
from gallery.core.passwords import verify_password
from gallery.infrastructure.storage import DatabaseStorage
from gallery.scripts.seed import SAMPLE_INVITATIONS, seed_database


def _settings() -> Settings:
    return Settings(
        seed_admin_username="admin", seed_admin_password="admin123",
        default_share_link="https://t.me",
    )


async def test_seed_creates_admin_setting_and_invitations(test_db):
    storage = DatabaseStorage(test_db)
    report = await seed_database(storage, _settings())

    assert report == {"admin_created": True, "invitations_created": len(SAMPLE_INVITATIONS)}

    admin = await storage.get_admin_user_by_username("admin")
    assert verify_password("admin123", admin.password)

    link = await storage.get_setting("telegram_link")
    assert link.value == "https://t.me"

    invitations = await storage.list_invitations()
    assert len(invitations) == 6
    for invitation in invitations:
        assert invitation.image_url.startswith(SAMPLE_IMAGE_URL_PREFIX)
        assert invitation.image_url[len(SAMPLE_IMAGE_URL_PREFIX):] in SAMPLE_IMAGES


async def test_seed_is_idempotent(test_db):
    storage = DatabaseStorage(test_db)
    await seed_database(storage, _settings())
    report = await seed_database(storage, _settings())

    assert report == {"admin_created": False, "invitations_created": 0}
    assert len(await storage.list_invitations()) == 6
    assert len(await storage.list_settings()) == 1


async def test_seed_keeps_existing_invitations(test_db):
    storage = DatabaseStorage(test_db)
    await storage.create_invitation({
        "title": "Mine", "description": "Custom", "price": 1,
        "image_url": "/uploads/mine.png",
    })
    report = await seed_database(storage, _settings())
    assert report["invitations_created"] == 0
    assert len(await storage.list_invitations()) == 1
