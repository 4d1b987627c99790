"""
Stores API Endpoints
Merchant store management: create, list, update branding/SEO/legal pages, delete
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from storefront_admin.api.deps import get_owned_store, get_store_service
from storefront_admin.core.auth import TokenUser, get_current_user
from storefront_admin.domain.store import LegalPagesUpdate, Store, StoreCreate, StoreUpdate
from storefront_admin.services.store_service import StoreService, generate_slug, get_store_url

router = APIRouter()


def _store_payload(store: Store) -> dict:
    data = store.to_dict()
    data["url"] = get_store_url(store)
    return data


@router.get("/")
async def list_stores(
    user: TokenUser = Depends(get_current_user),
    service: StoreService = Depends(get_store_service),
):
    """List the signed-in merchant's stores"""
    try:
        stores = service.list_stores(user.id)
        return {
            "status": "success",
            "count": len(stores),
            "data": [_store_payload(store) for store in stores]
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching stores: {str(e)}")


@router.get("/slug-availability")
async def check_slug(
    name: str = Query(..., min_length=1, description="Store name to derive the slug from"),
    exclude_store_id: Optional[str] = Query(None),
    user: TokenUser = Depends(get_current_user),
    service: StoreService = Depends(get_store_service),
):
    slug = generate_slug(name)
    available = bool(slug) and service.check_slug_availability(slug, exclude_store_id)
    return {"status": "success", "data": {"slug": slug, "available": available}}


@router.post("/", status_code=201)
async def create_store(
    payload: StoreCreate,
    user: TokenUser = Depends(get_current_user),
    service: StoreService = Depends(get_store_service),
):
    """
    Create a store

    Fails with 400 when the merchant already owns the maximum number of
    stores or the slug derived from the name is taken.
    """
    try:
        store = service.create_store(user.id, payload.name, payload.description)
        return {"status": "success", "data": _store_payload(store)}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error creating store: {str(e)}")


@router.get("/{store_id}")
async def get_store(store: Store = Depends(get_owned_store)):
    return {"status": "success", "data": _store_payload(store)}


@router.patch("/{store_id}")
async def update_store(
    payload: StoreUpdate,
    store: Store = Depends(get_owned_store),
    service: StoreService = Depends(get_store_service),
):
    try:
        updated = service.update_store(store, payload.to_updates())
        return {"status": "success", "data": _store_payload(updated)}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error updating store: {str(e)}")


@router.put("/{store_id}/legal-pages")
async def update_legal_pages(
    payload: LegalPagesUpdate,
    store: Store = Depends(get_owned_store),
    service: StoreService = Depends(get_store_service),
):
    """Merge the given legal page texts into the store's legal_pages"""
    try:
        legal_pages = {**(store.legal_pages or {}), **payload.model_dump(exclude_unset=True)}
        updated = service.update_store(store, {"legal_pages": legal_pages})
        return {"status": "success", "data": updated.legal_pages or {}}
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error updating legal pages: {str(e)}")


@router.delete("/{store_id}")
async def delete_store(
    store: Store = Depends(get_owned_store),
    service: StoreService = Depends(get_store_service),
):
    try:
        deleted = service.delete_store(store)
        return {"status": "success", "data": {"id": store.id, "deleted": deleted}}
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error deleting store: {str(e)}")
