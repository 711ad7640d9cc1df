"""Settings endpoints."""

from typing import Any

from fastapi import APIRouter, BackgroundTasks, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.auth import get_current_admin
from storefront.api.upload import get_upload_storage
from storefront.core.settings_store import SettingsStore
from storefront.core.settings_sync import SettingsSync
from storefront.core.uploads import UploadStorage
from storefront.database import get_db

router = APIRouter()


def get_settings_store(db: Session = Depends(get_db)) -> SettingsStore:
    return SettingsStore(db)


@router.get("")
def get_settings(store: SettingsStore = Depends(get_settings_store)):
    """Get all settings. Public: the storefront renders from them."""
    return {"success": True, "data": store.get_all()}


@router.get("/{key}")
def get_setting(key: str, store: SettingsStore = Depends(get_settings_store)):
    """Get setting by key."""
    value = store.get(key)
    if value is None:
        raise HTTPException(status_code=404, detail="Setting not found")
    return {"success": True, "data": {"key": key, "value": value}}


@router.put("")
def update_settings(
    background_tasks: BackgroundTasks,
    payload: Any = Body(None),
    store: SettingsStore = Depends(get_settings_store),
    storage: UploadStorage = Depends(get_upload_storage),
    current_admin=Depends(get_current_admin),
):
    """
    Update settings from a flat key/value object.

    Files referenced by replaced ``*_image`` values are deleted after the
    response is sent.
    """
    sync = SettingsSync(store, storage, defer=background_tasks.add_task)
    sync.apply_settings_update(payload)
    return {"success": True, "message": "Settings updated successfully"}
