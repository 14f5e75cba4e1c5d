"""Settings Routes: public read of site settings, admin upsert by key."""

import logging

from fastapi import APIRouter, Depends

from gallery.api.dependencies import AdminGatedRoute, get_storage, require_admin
from gallery.core.repository_protocols import Storage
from gallery.schemas.setting import SettingResponse, SettingUpsert

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/settings", tags=["settings"], route_class=AdminGatedRoute,
)


@router.get("", response_model=list[SettingResponse])
async def list_settings(storage: Storage = Depends(get_storage)):
    return await storage.list_settings()


@router.post(
    "", response_model=SettingResponse, dependencies=[Depends(require_admin)],
)
async def upsert_setting(body: SettingUpsert, storage: Storage = Depends(get_storage)):
    """Create the setting if the key is new, else overwrite its value."""
    setting = await storage.upsert_setting(body.key, body.value)
    logger.info("Setting saved", extra={"setting_key": setting.key})
    return setting
