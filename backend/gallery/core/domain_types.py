"""Domain Types: identity types, well-known setting keys and the sample image map.

Invariants:
    - InvitationId, AdminUserId, SettingId wrap UUIDs
    - parse_id() never raises: malformed ids are treated as absent
    - SAMPLE_IMAGES is the only source of bundled fallback image names
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

InvitationId = NewType("InvitationId", UUID)
AdminUserId = NewType("AdminUserId", UUID)
SettingId = NewType("SettingId", UUID)


def parse_id(raw: str | UUID) -> UUID | None:
    """Parse an opaque id from a URL or session payload; None if malformed."""
    if isinstance(raw, UUID):
        return raw
    try:
        return UUID(str(raw))
    except ValueError:
        return None


# ─── Enums ───────────────────────────────────────────────────────

class SettingKey(str, Enum):
    """Setting keys the application itself reads or seeds."""
    TELEGRAM_LINK = "telegram_link"


# ─── Bundled sample images ───────────────────────────────────────

SAMPLE_IMAGES: dict[str, str] = {
    "wedding": "elegant_wedding_invitation_design.png",
    "birthday": "modern_birthday_party_invitation.png",
    "corporate": "luxurious_corporate_event_invitation.png",
    "rustic": "rustic_outdoor_wedding_invitation.png",
    "baby-shower": "baby_shower_invitation_design.png",
    "gala": "black_tie_gala_invitation.png",
}

SAMPLE_IMAGE_URL_PREFIX = "/api/sample-images/"
