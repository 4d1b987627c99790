"""
Commerce Settings API Endpoints
Tax configurations and payment/order settings of a store
"""
from fastapi import APIRouter, Depends, HTTPException

from storefront_admin.api.deps import get_owned_store, get_store_service, get_tax_repository
from storefront_admin.domain.commerce import (
    CommerceSettingsUpdate,
    TaxConfigurationCreate,
    TaxConfigurationUpdate,
)
from storefront_admin.domain.store import COMMERCE_COLUMNS, Store
from storefront_admin.repositories.settings_repository import TaxConfigurationRepository
from storefront_admin.services.store_service import StoreService

router = APIRouter()


def _commerce_payload(store: Store) -> dict:
    data = store.to_dict()
    return {column: data.get(column) for column in sorted(COMMERCE_COLUMNS)}


# ============================================================================
# Payment and order settings
# ============================================================================

@router.get("/stores/{store_id}/settings")
async def get_commerce_settings(store: Store = Depends(get_owned_store)):
    return {"status": "success", "data": _commerce_payload(store)}


@router.put("/stores/{store_id}/settings")
async def update_commerce_settings(
    payload: CommerceSettingsUpdate,
    store: Store = Depends(get_owned_store),
    service: StoreService = Depends(get_store_service),
):
    try:
        updated = service.update_store(store, payload.model_dump(mode="json", exclude_unset=True))
        return {"status": "success", "data": _commerce_payload(updated)}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error updating commerce settings: {str(e)}")


# ============================================================================
# Tax configurations
# ============================================================================

@router.get("/stores/{store_id}/taxes")
async def list_taxes(
    store: Store = Depends(get_owned_store),
    repo: TaxConfigurationRepository = Depends(get_tax_repository),
):
    try:
        taxes = repo.find_all_for_store(store.id)
        return {
            "status": "success",
            "count": len(taxes),
            "data": [tax.to_dict() for tax in taxes]
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching tax configurations: {str(e)}")


@router.post("/stores/{store_id}/taxes", status_code=201)
async def create_tax(
    payload: TaxConfigurationCreate,
    store: Store = Depends(get_owned_store),
    repo: TaxConfigurationRepository = Depends(get_tax_repository),
):
    try:
        tax = repo.create(store.id, payload.model_dump(mode="json"))
        return {"status": "success", "data": tax.to_dict()}
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error creating tax configuration: {str(e)}")


@router.patch("/stores/{store_id}/taxes/{tax_id}")
async def update_tax(
    tax_id: str,
    payload: TaxConfigurationUpdate,
    store: Store = Depends(get_owned_store),
    repo: TaxConfigurationRepository = Depends(get_tax_repository),
):
    try:
        existing = repo.find_by_id(store.id, tax_id)
        if existing is None:
            raise HTTPException(status_code=404, detail=f"Tax configuration {tax_id} not found")

        updates = payload.model_dump(mode="json", exclude_unset=True)
        effective_from = updates.get("effective_from") or existing.effective_from.isoformat()
        effective_to = updates.get("effective_to", existing.effective_to.isoformat() if existing.effective_to else None)
        if effective_to is not None and effective_to < effective_from:
            raise ValueError("effective_to must be on or after effective_from")

        tax = repo.update(store.id, tax_id, updates)
        if tax is None:
            raise HTTPException(status_code=404, detail=f"Tax configuration {tax_id} not found")
        return {"status": "success", "data": tax.to_dict()}
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error updating tax configuration: {str(e)}")


@router.delete("/stores/{store_id}/taxes/{tax_id}")
async def delete_tax(
    tax_id: str,
    store: Store = Depends(get_owned_store),
    repo: TaxConfigurationRepository = Depends(get_tax_repository),
):
    try:
        if not repo.delete(store.id, tax_id):
            raise HTTPException(status_code=404, detail=f"Tax configuration {tax_id} not found")
        return {"status": "success", "data": {"id": tax_id, "deleted": True}}
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error deleting tax configuration: {str(e)}")
