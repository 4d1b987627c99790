"""
Notification Settings API Endpoints
"""
from fastapi import APIRouter, Depends, HTTPException

from storefront_admin.api.deps import get_notification_repository, get_owned_store
from storefront_admin.domain.notifications import (
    NOTIFICATION_TYPES,
    NotificationPreferences,
    NotificationSettings,
)
from storefront_admin.domain.store import Store
from storefront_admin.repositories.settings_repository import NotificationSettingsRepository

router = APIRouter()


@router.get("/stores/{store_id}")
async def get_notification_settings(
    store: Store = Depends(get_owned_store),
    repo: NotificationSettingsRepository = Depends(get_notification_repository),
):
    """Settings for the store (defaults when none were saved yet)"""
    try:
        settings = repo.get_or_create(store.id)
        return {
            "status": "success",
            "data": settings.model_dump(),
            "types": [{"key": key, "label": label} for key, label in NOTIFICATION_TYPES],
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching notification settings: {str(e)}")


@router.put("/stores/{store_id}")
async def save_notification_settings(
    payload: NotificationPreferences,
    store: Store = Depends(get_owned_store),
    repo: NotificationSettingsRepository = Depends(get_notification_repository),
):
    try:
        saved = repo.upsert(NotificationSettings(store_id=store.id, **payload.model_dump()))
        return {"status": "success", "data": saved.model_dump()}
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error saving notification settings: {str(e)}")
