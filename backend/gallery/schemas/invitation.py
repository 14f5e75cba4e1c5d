"""Invitation Schemas: request validation and response shape, independent of the ORM.

Invariants:
    - InvitationCreate: title/description stripped and non-empty, 0 <= price <= MAX_PRICE integer
    - InvitationUpdate: every field optional; only fields actually sent are applied
    - Responses serialize camelCase (imageUrl, createdAt)
    - invitation_values() is the only mapping from validated input to table columns
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Largest value a 32-bit INTEGER column holds
MAX_PRICE = 2_147_483_647


class _TextFields(BaseModel):
    @field_validator("title", "description", check_fields=False)
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v


class InvitationCreate(_TextFields):
    """Fields required to create an invitation (image handled separately)."""
    title: str
    description: str
    price: int = Field(ge=0, le=MAX_PRICE)


class InvitationUpdate(_TextFields):
    """Partial update. Fields left as None are not touched."""
    title: str | None = None
    description: str | None = None
    price: int | None = Field(None, ge=0, le=MAX_PRICE)


class InvitationResponse(BaseModel):
    """Invitation as returned by the API."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )

    id: UUID
    title: str
    description: str
    price: int
    image_url: str
    created_at: datetime


def invitation_values(
    data: InvitationCreate | InvitationUpdate, image_url: str | None = None,
) -> dict:
    """Map validated input (plus a stored image URL) onto invitation columns."""
    values = data.model_dump(exclude_none=True)
    if image_url is not None:
        values["image_url"] = image_url
    return values
