"""Setting Schemas: upsert payload and camelCase response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class SettingUpsert(BaseModel):
    """Create-or-update payload. key is stripped and must be non-empty."""
    key: str = Field(min_length=1, max_length=255)
    value: str

    @field_validator("key")
    @classmethod
    def strip_key(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("key cannot be empty or whitespace")
        return v


class SettingResponse(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )

    id: UUID
    key: str
    value: str
    updated_at: datetime
