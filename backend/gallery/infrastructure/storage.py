"""Database Storage: typed CRUD over invitations, admin users and settings.

Invariants:
    - One method = one entity = one commit (no multi-row transactions)
    - Absent or malformed ids return None; delete of an absent id is a no-op
    - SQLAlchemy failures roll back, are logged with their cause, and surface as DatabaseError
    - A duplicate username at insert time surfaces as ConflictError
    - upsert_setting keeps the row id and refreshes updated_at; losing an insert
      race on the key falls back to updating the winner's row once

Design Decisions:
    - Implements core.repository_protocols.Storage over an AsyncSession per request
"""

import functools
import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.domain_types import parse_id
from gallery.core.errors import ConflictError, DatabaseError
from gallery.models.admin_user import AdminUser
from gallery.models.invitation import Invitation
from gallery.models.setting import Setting

logger = logging.getLogger(__name__)

_INVITATION_COLUMNS = frozenset({"title", "description", "price", "image_url"})


def _storage_operation(operation: str):
    """Roll back and map SQLAlchemy failures to DatabaseError."""

    def decorator(fn):
        @functools.wraps(fn)
        async def wrapper(self: "DatabaseStorage", *args, **kwargs):
            try:
                return await fn(self, *args, **kwargs)
            except SQLAlchemyError as e:
                await self.db.rollback()
                logger.error(
                    f"Storage {operation} failed: {e}",
                    exc_info=True, extra={"operation": operation},
                )
                raise DatabaseError(operation) from e
        return wrapper

    return decorator


class DatabaseStorage:
    """SQLAlchemy-backed Storage."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Invitations ────────────────────────────────────────────

    @_storage_operation("list_invitations")
    async def list_invitations(self) -> list[Invitation]:
        result = await self.db.execute(
            select(Invitation).order_by(Invitation.created_at.asc()),
        )
        return list(result.scalars().all())

    @_storage_operation("get_invitation")
    async def get_invitation(self, invitation_id: str | UUID) -> Invitation | None:
        uid = parse_id(invitation_id)
        if uid is None:
            return None
        return await self.db.get(Invitation, uid)

    @_storage_operation("create_invitation")
    async def create_invitation(self, values: dict) -> Invitation:
        invitation = Invitation(**_invitation_columns(values))
        self.db.add(invitation)
        await self.db.commit()
        await self.db.refresh(invitation)
        return invitation

    @_storage_operation("update_invitation")
    async def update_invitation(
        self, invitation_id: str | UUID, values: dict,
    ) -> Invitation | None:
        uid = parse_id(invitation_id)
        if uid is None:
            return None
        invitation = await self.db.get(Invitation, uid)
        if invitation is None:
            return None
        for column, value in _invitation_columns(values).items():
            setattr(invitation, column, value)
        await self.db.commit()
        await self.db.refresh(invitation)
        return invitation

    @_storage_operation("delete_invitation")
    async def delete_invitation(self, invitation_id: str | UUID) -> None:
        uid = parse_id(invitation_id)
        if uid is None:
            return
        await self.db.execute(delete(Invitation).where(Invitation.id == uid))
        await self.db.commit()

    # ─── Admin users ────────────────────────────────────────────

    @_storage_operation("get_admin_user")
    async def get_admin_user(self, user_id: str | UUID) -> AdminUser | None:
        uid = parse_id(user_id)
        if uid is None:
            return None
        return await self.db.get(AdminUser, uid)

    @_storage_operation("get_admin_user_by_username")
    async def get_admin_user_by_username(self, username: str) -> AdminUser | None:
        result = await self.db.execute(
            select(AdminUser).where(AdminUser.username == username),
        )
        return result.scalar_one_or_none()

    async def create_admin_user(self, username: str, password_hash: str) -> AdminUser:
        """Insert an admin row. password_hash is stored verbatim."""
        user = AdminUser(username=username, password=password_hash)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Duplicate admin username on insert: {e.orig}")
            raise ConflictError("Username already exists") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Storage create_admin_user failed: {e}",
                exc_info=True, extra={"operation": "create_admin_user"},
            )
            raise DatabaseError("create_admin_user") from e
        await self.db.refresh(user)
        return user

    # ─── Settings ───────────────────────────────────────────────

    @_storage_operation("list_settings")
    async def list_settings(self) -> list[Setting]:
        result = await self.db.execute(select(Setting).order_by(Setting.key))
        return list(result.scalars().all())

    @_storage_operation("get_setting")
    async def get_setting(self, key: str) -> Setting | None:
        result = await self.db.execute(select(Setting).where(Setting.key == key))
        return result.scalar_one_or_none()

    @_storage_operation("upsert_setting")
    async def upsert_setting(self, key: str, value: str) -> Setting:
        setting = await self._find_setting(key)
        if setting is None:
            setting = Setting(key=key, value=value)
            self.db.add(setting)
            try:
                await self.db.commit()
            except IntegrityError:
                # Lost an insert race on the unique key; the row exists now
                await self.db.rollback()
                logger.info(
                    "Concurrent setting insert, retrying as update",
                    extra={"setting_key": key},
                )
                setting = await self._find_setting(key)
                if setting is None:
                    raise
                await self._overwrite_setting(setting, value)
        else:
            await self._overwrite_setting(setting, value)
        await self.db.refresh(setting)
        return setting

    async def _find_setting(self, key: str) -> Setting | None:
        result = await self.db.execute(select(Setting).where(Setting.key == key))
        return result.scalar_one_or_none()

    async def _overwrite_setting(self, setting: Setting, value: str) -> None:
        setting.value = value
        setting.updated_at = datetime.now(timezone.utc)
        await self.db.commit()


def _invitation_columns(values: dict) -> dict:
    unknown = set(values) - _INVITATION_COLUMNS
    if unknown:
        raise ValueError(f"Unknown invitation columns: {sorted(unknown)}")
    return values
