"""Admin Schemas: login/registration payloads and the small auth responses."""

from pydantic import BaseModel, Field


class AdminCredentials(BaseModel):
    """Username + plaintext password, used by both login and registration."""
    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=72)


class SuccessResponse(BaseModel):
    success: bool = True


class SessionStatusResponse(BaseModel):
    authenticated: bool
