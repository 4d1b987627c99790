"""
Location & Opening Hours API Endpoints
"""
import httpx
from fastapi import APIRouter, Depends, HTTPException

from storefront_admin.api.deps import get_geocoding_service, get_owned_store, get_store_service
from storefront_admin.domain.location import LocationUpdate
from storefront_admin.domain.store import LOCATION_COLUMNS, Store
from storefront_admin.services.geocoding_service import GeocodingService, build_full_address
from storefront_admin.services.store_service import StoreService

router = APIRouter()


def _location_payload(store: Store) -> dict:
    data = {column: getattr(store, column) for column in sorted(LOCATION_COLUMNS)}
    data["full_address"] = build_full_address(
        store.address_line1, store.address_line2, store.city,
        store.state_province, store.postal_code, store.country,
    )
    return data


@router.get("/stores/{store_id}")
async def get_location(store: Store = Depends(get_owned_store)):
    return {"status": "success", "data": _location_payload(store)}


@router.put("/stores/{store_id}")
async def update_location(
    payload: LocationUpdate,
    store: Store = Depends(get_owned_store),
    service: StoreService = Depends(get_store_service),
):
    try:
        updated = service.update_store(store, payload.model_dump(exclude_unset=True))
        return {"status": "success", "data": _location_payload(updated)}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error updating location: {str(e)}")


@router.post("/stores/{store_id}/geocode")
async def geocode_store_address(
    store: Store = Depends(get_owned_store),
    geocoder: GeocodingService = Depends(get_geocoding_service),
):
    """
    Coordinates for the store's saved address

    The result is returned for confirmation, not saved.
    """
    address = build_full_address(
        store.address_line1, store.address_line2, store.city,
        store.state_province, store.postal_code, store.country,
    )
    try:
        result = await geocoder.geocode_address(address)
        return {"status": "success", "data": result.model_dump()}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except httpx.HTTPError as e:
        raise HTTPException(status_code=502, detail=f"Geocoding service unavailable: {str(e)}")
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error geocoding address: {str(e)}")
