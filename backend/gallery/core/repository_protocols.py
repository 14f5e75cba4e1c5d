"""Boundary Protocols: contracts between the API layer and the stores it drives.

Invariants:
    - Routes depend on these Protocols, never on a concrete store class
    - Absent rows are returned as None; only infrastructure failures raise
    - Storage never hashes passwords nor touches files

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
"""

from typing import Protocol
from uuid import UUID

from gallery.models.admin_user import AdminUser
from gallery.models.invitation import Invitation
from gallery.models.setting import Setting


class InvitationRepository(Protocol):
    """Invitation persistence."""
    async def list_invitations(self) -> list[Invitation]: ...
    async def get_invitation(self, invitation_id: str | UUID) -> Invitation | None: ...
    async def create_invitation(self, values: dict) -> Invitation: ...
    async def update_invitation(
        self, invitation_id: str | UUID, values: dict,
    ) -> Invitation | None: ...
    async def delete_invitation(self, invitation_id: str | UUID) -> None: ...


class AdminUserRepository(Protocol):
    """Admin account persistence. Caller hashes and checks uniqueness first."""
    async def get_admin_user(self, user_id: str | UUID) -> AdminUser | None: ...
    async def get_admin_user_by_username(self, username: str) -> AdminUser | None: ...
    async def create_admin_user(self, username: str, password_hash: str) -> AdminUser: ...


class SettingRepository(Protocol):
    """Key/value settings persistence with upsert-by-key."""
    async def list_settings(self) -> list[Setting]: ...
    async def get_setting(self, key: str) -> Setting | None: ...
    async def upsert_setting(self, key: str, value: str) -> Setting: ...


class Storage(InvitationRepository, AdminUserRepository, SettingRepository, Protocol):
    """Everything the HTTP layer needs from the persistent store."""


class SessionStore(Protocol):
    """Server-side admin sessions: opaque token -> admin id, with expiry."""
    def create(self, admin_id: UUID) -> str: ...
    def get(self, token: str | None) -> UUID | None: ...
    def destroy(self, token: str | None) -> None: ...
