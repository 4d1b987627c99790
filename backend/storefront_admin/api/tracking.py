"""
Tracking Pixels API Endpoints
"""
from fastapi import APIRouter, Depends, HTTPException

from storefront_admin.api.deps import get_owned_store, get_store_service
from storefront_admin.domain.store import TRACKING_COLUMNS, Store
from storefront_admin.domain.tracking import TrackingSettings
from storefront_admin.services.store_service import StoreService
from storefront_admin.services.tracking_service import validate_tracking_settings

router = APIRouter()


def _tracking_payload(store: Store) -> dict:
    return TrackingSettings(**{column: getattr(store, column) for column in TRACKING_COLUMNS}).model_dump()


@router.get("/stores/{store_id}")
async def get_tracking_settings(store: Store = Depends(get_owned_store)):
    return {"status": "success", "data": _tracking_payload(store)}


@router.put("/stores/{store_id}")
async def update_tracking_settings(
    payload: TrackingSettings,
    store: Store = Depends(get_owned_store),
    service: StoreService = Depends(get_store_service),
):
    """Save pixel IDs; an enabled pixel must carry a well-formed ID"""
    try:
        validate_tracking_settings(payload)
        updated = service.update_store(store, payload.model_dump())
        return {"status": "success", "data": _tracking_payload(updated)}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error updating tracking settings: {str(e)}")
