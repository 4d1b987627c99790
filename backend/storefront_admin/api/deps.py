"""
Shared router dependencies

Service/repository providers are plain functions so tests can swap them
with app.dependency_overrides.
"""
from fastapi import Depends, HTTPException, Path

from storefront_admin.core.auth import TokenUser, get_current_user
from storefront_admin.domain.store import Store
from storefront_admin.repositories.settings_repository import (
    NotificationSettingsRepository,
    TaxConfigurationRepository,
)
from storefront_admin.repositories.product_repository import ProductRepository
from storefront_admin.repositories.store_repository import StoreRepository
from storefront_admin.services.analytics_service import AnalyticsService
from storefront_admin.services.domain_verifier import DomainVerifier
from storefront_admin.services.geocoding_service import GeocodingService
from storefront_admin.services.recommendation_service import RecommendationService
from storefront_admin.services.store_service import StoreService


def get_store_repository() -> StoreRepository:
    return StoreRepository()


def get_product_repository() -> ProductRepository:
    return ProductRepository()


def get_store_service(repo: StoreRepository = Depends(get_store_repository)) -> StoreService:
    return StoreService(repo)


def get_domain_verifier(repo: StoreRepository = Depends(get_store_repository)) -> DomainVerifier:
    return DomainVerifier(repo)


def get_analytics_service() -> AnalyticsService:
    return AnalyticsService()


def get_notification_repository() -> NotificationSettingsRepository:
    return NotificationSettingsRepository()


def get_tax_repository() -> TaxConfigurationRepository:
    return TaxConfigurationRepository()


def get_geocoding_service() -> GeocodingService:
    return GeocodingService()


def get_recommendation_service(
    repo: ProductRepository = Depends(get_product_repository)
) -> RecommendationService:
    return RecommendationService(repo)


def get_owned_store(
    store_id: str = Path(..., description="Store UUID"),
    user: TokenUser = Depends(get_current_user),
    service: StoreService = Depends(get_store_service),
) -> Store:
    """The path's store, only if the signed-in merchant owns it (404 otherwise)"""
    try:
        store = service.get_owned_store(store_id, user.id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching store: {str(e)}")

    if store is None:
        raise HTTPException(status_code=404, detail=f"Store {store_id} not found")
    return store


def get_public_store(
    slug: str = Path(..., description="Store slug"),
    repo: StoreRepository = Depends(get_store_repository),
) -> Store:
    """Active store by slug for shopper-facing routes"""
    try:
        store = repo.find_by_slug(slug)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching store: {str(e)}")

    if store is None or not store.is_active:
        raise HTTPException(status_code=404, detail="Store not found")
    return store
