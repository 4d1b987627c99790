"""
Store Repository - Data Access Layer for Stores

Handles all `stores` table and store RPC calls and returns Store domain models.
"""
from typing import Any, Dict, List, Optional

from supabase import Client

from storefront_admin.core.database import get_supabase
from storefront_admin.domain.store import Store

STORES_TABLE = "stores"


class StoreRepository:
    """
    Repository for Store data access

    All queries against `stores` are centralized here.
    Returns Store domain models, not raw dictionaries.
    """

    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_supabase()
        return self._client

    @staticmethod
    def _first(rows: Optional[List[dict]]) -> Optional[Store]:
        if not rows:
            return None
        return Store.from_row(rows[0])

    def find_by_id(self, store_id: str) -> Optional[Store]:
        """
        Find store by ID

        Returns:
            Store or None if not found
        """
        result = (
            self.client.table(STORES_TABLE)
            .select("*")
            .eq("id", store_id)
            .limit(1)
            .execute()
        )
        return self._first(result.data)

    def find_by_id_for_user(self, store_id: str, user_id: str) -> Optional[Store]:
        """Find a store only if it belongs to the given merchant"""
        result = (
            self.client.table(STORES_TABLE)
            .select("*")
            .eq("id", store_id)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        return self._first(result.data)

    def find_by_slug(self, slug: str) -> Optional[Store]:
        result = (
            self.client.table(STORES_TABLE)
            .select("*")
            .eq("slug", slug)
            .limit(1)
            .execute()
        )
        return self._first(result.data)

    def find_all_for_user(self, user_id: str) -> List[Store]:
        result = (
            self.client.table(STORES_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=False)
            .execute()
        )
        return [Store.from_row(row) for row in (result.data or [])]

    def count_for_user(self, user_id: str) -> int:
        result = (
            self.client.table(STORES_TABLE)
            .select("id", count="exact", head=True)
            .eq("user_id", user_id)
            .execute()
        )
        return result.count or 0

    def is_slug_available(self, slug: str, exclude_store_id: Optional[str] = None) -> bool:
        """
        Ask the database whether a slug is free

        Uniqueness is enforced server side by `is_store_slug_available`;
        exclude_store_id lets a store keep its own slug on rename.
        """
        result = self.client.rpc(
            "is_store_slug_available",
            {"check_slug": slug, "exclude_store_id": exclude_store_id},
        ).execute()
        return bool(result.data)

    def create(self, user_id: str, name: str, slug: str, description: Optional[str] = None) -> Store:
        """
        Insert a new store

        The subdomain is generated by a database trigger from the slug.
        """
        result = (
            self.client.table(STORES_TABLE)
            .insert({
                "user_id": user_id,
                "name": name,
                "slug": slug,
                "description": description,
            })
            .execute()
        )
        store = self._first(result.data)
        if store is None:
            raise RuntimeError("Store insert returned no row")
        return store

    def update(self, store_id: str, updates: Dict[str, Any]) -> Optional[Store]:
        """
        Apply a partial update and return the updated row

        One remote call per user action; the database owns constraint checks.
        """
        result = (
            self.client.table(STORES_TABLE)
            .update(updates)
            .eq("id", store_id)
            .execute()
        )
        return self._first(result.data)

    def delete(self, store_id: str) -> bool:
        result = (
            self.client.table(STORES_TABLE)
            .delete()
            .eq("id", store_id)
            .execute()
        )
        return bool(result.data)

    def find_domains_to_verify(self) -> List[dict]:
        """Stores with a custom domain that is pending or verified"""
        result = (
            self.client.table(STORES_TABLE)
            .select("id, name, custom_domain, domain_status, domain_verification_token")
            .in_("domain_status", ["pending", "verified"])
            .not_.is_("custom_domain", "null")
            .execute()
        )
        return result.data or []
