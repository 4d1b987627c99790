"""
SEO API Endpoints
Store SEO score: for a saved store, or for unsaved form values
"""
from fastapi import APIRouter, Depends

from storefront_admin.api.deps import get_owned_store
from storefront_admin.core.auth import TokenUser, get_current_user
from storefront_admin.domain.seo import StoreSEOData
from storefront_admin.domain.store import Store
from storefront_admin.services.seo_validator import validate_store_seo

router = APIRouter()


@router.get("/stores/{store_id}")
async def get_store_seo(store: Store = Depends(get_owned_store)):
    """Score the store as currently saved"""
    result = validate_store_seo(StoreSEOData(**store.model_dump()))
    return {"status": "success", "data": result.model_dump(mode="json")}


@router.post("/validate")
async def validate_seo(
    payload: StoreSEOData,
    user: TokenUser = Depends(get_current_user),
):
    """Score draft values while the merchant edits the form"""
    result = validate_store_seo(payload)
    return {"status": "success", "data": result.model_dump(mode="json")}
