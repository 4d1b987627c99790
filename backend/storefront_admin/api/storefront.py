"""
Public Storefront API Endpoints
Shopper-facing reads by store slug: legal pages, tracking config, recommendations
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from storefront_admin.api.deps import get_public_store, get_recommendation_service
from storefront_admin.core.auth import TokenUser, get_current_user_optional
from storefront_admin.domain.recommendations import BehaviorEvent
from storefront_admin.domain.store import Store
from storefront_admin.services.export_service import (
    LegalPageNotFound,
    LegalPageUnavailable,
    get_legal_page,
)
from storefront_admin.services.recommendation_service import RecommendationService
from storefront_admin.services.tracking_service import public_tracking_config

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{slug}/legal/{page_key}")
async def get_store_legal_page(page_key: str, store: Store = Depends(get_public_store)):
    """Legal page text (terms, privacy, returns, shipping, refund, cookies, faq)"""
    try:
        content = get_legal_page(store, page_key)
    except (LegalPageNotFound, LegalPageUnavailable) as e:
        raise HTTPException(status_code=404, detail=str(e))

    return {
        "status": "success",
        "data": {"store_name": store.name, "page": page_key, "content": content}
    }


@router.get("/{slug}/tracking")
async def get_store_tracking(store: Store = Depends(get_public_store)):
    """Enabled pixels only"""
    return {"status": "success", "data": public_tracking_config(store)}


@router.get("/{slug}/recommendations")
async def get_recommendations(
    product_id: Optional[str] = Query(None, description="Product being viewed"),
    limit: int = Query(8, ge=1, le=20),
    store: Store = Depends(get_public_store),
    user: Optional[TokenUser] = Depends(get_current_user_optional),
    service: RecommendationService = Depends(get_recommendation_service),
):
    try:
        result = await service.get_recommendations(store.id, product_id, user_id=user.id if user else None)
        data = result.model_dump(mode="json")
        data["recommendations"] = data["recommendations"][:limit]
        return {"status": "success", "data": data}
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching recommendations: {str(e)}")


@router.post("/{slug}/behavior", status_code=202)
async def track_behavior(
    event: BehaviorEvent,
    store: Store = Depends(get_public_store),
    user: Optional[TokenUser] = Depends(get_current_user_optional),
    service: RecommendationService = Depends(get_recommendation_service),
):
    """Record a shopper interaction (view, cart, purchase, favorite, share)"""
    try:
        service.track_behavior(store.id, event, user.id if user else None)
        return {"status": "success"}
    except Exception as e:
        logger.error("Error tracking behavior", extra={"store_id": store.id, "error": str(e)})
        raise HTTPException(status_code=500, detail=f"Error tracking behavior: {str(e)}")
