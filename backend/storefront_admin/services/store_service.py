"""
Store Service - store lifecycle and URL helpers

Business rules around the `stores` row: slug generation and uniqueness,
the per-merchant store limit, update sanitising and storefront URLs.
"""
import logging
import re
from typing import Any, Dict, List, Optional

from storefront_admin.core.config import settings
from storefront_admin.domain.store import NON_NULLABLE_COLUMNS, UPDATABLE_COLUMNS, Store
from storefront_admin.repositories.store_repository import StoreRepository

logger = logging.getLogger(__name__)


def generate_slug(name: str) -> str:
    """
    URL-safe slug from a store name

    "  Ma Boutique  Bio! " -> "ma-boutique-bio"
    """
    slug = (name or "").lower().strip()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def sanitize_updates(updates: Dict[str, Any]) -> Dict[str, Any]:
    """
    Keep only columns the admin screens are allowed to write

    A null for a required column (name, slug, is_active) is dropped too.
    """
    kept = {
        key: value for key, value in updates.items()
        if key in UPDATABLE_COLUMNS and not (value is None and key in NON_NULLABLE_COLUMNS)
    }
    dropped = sorted(set(updates) - set(kept))
    if dropped:
        logger.debug(f"Dropping store fields from update: {dropped}")
    return kept


def get_store_url(store: Store, base_domain: Optional[str] = None) -> str:
    host = store.subdomain or store.slug
    domain = store.custom_domain or base_domain or settings.STOREFRONT_BASE_DOMAIN
    return f"https://{host}.{domain}"


def get_product_url(store: Store, product_slug: str, base_domain: Optional[str] = None) -> str:
    return f"{get_store_url(store, base_domain)}/products/{product_slug}"


class StoreService:
    """
    Store operations for an authenticated merchant
    """

    def __init__(self, repository: Optional[StoreRepository] = None):
        self.repository = repository or StoreRepository()

    def check_slug_availability(self, slug: str, exclude_store_id: Optional[str] = None) -> bool:
        """
        A failing availability RPC counts as "not available" so that a
        store is never created on an unverified slug.
        """
        try:
            return self.repository.is_slug_available(slug, exclude_store_id)
        except Exception as e:
            logger.error("Slug availability check failed", extra={"slug": slug, "error": str(e)})
            return False

    def list_stores(self, user_id: str) -> List[Store]:
        return self.repository.find_all_for_user(user_id)

    def get_owned_store(self, store_id: str, user_id: str) -> Optional[Store]:
        """Store only if the merchant owns it (None covers missing and foreign)"""
        return self.repository.find_by_id_for_user(store_id, user_id)

    def create_store(self, user_id: str, name: str, description: Optional[str] = None) -> Store:
        """
        Create a store for a merchant

        Raises:
            ValueError: store limit reached, empty name or slug already taken
        """
        limit = settings.MAX_STORES_PER_USER
        if self.repository.count_for_user(user_id) >= limit:
            raise ValueError(f"Store limit reached: a merchant can own at most {limit} stores")

        slug = generate_slug(name)
        if not slug:
            raise ValueError("Store name must contain at least one letter or digit")

        if not self.check_slug_availability(slug):
            raise ValueError(f"The store name '{name}' is already taken. Please choose another name.")

        store = self.repository.create(user_id, name.strip(), slug, description)
        logger.info("Store created", extra={"store_id": store.id, "user_id": user_id, "slug": slug})
        return store

    def update_store(self, store: Store, updates: Dict[str, Any]) -> Store:
        """
        Apply a partial update to a store

        A name change regenerates the slug, which must stay unique.

        Raises:
            ValueError: new slug already taken
        """
        payload = sanitize_updates(updates)

        new_name = payload.get("name")
        if new_name and new_name != store.name:
            slug = generate_slug(new_name)
            if not slug:
                raise ValueError("Store name must contain at least one letter or digit")
            if slug != store.slug:
                if not self.check_slug_availability(slug, exclude_store_id=store.id):
                    raise ValueError(f"The store name '{new_name}' is already taken. Please choose another name.")
                payload["slug"] = slug

        if not payload:
            return store

        updated = self.repository.update(store.id, payload)
        if updated is None:
            raise RuntimeError(f"Store {store.id} not found while updating")
        return updated

    def delete_store(self, store: Store) -> bool:
        deleted = self.repository.delete(store.id)
        logger.info("Store deleted", extra={"store_id": store.id, "deleted": deleted})
        return deleted
