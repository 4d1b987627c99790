"""
Product Repository - storefront product reads and shopper behaviour events

Products belong to stores; this backend only reads them (sitemap,
recommendations). Behaviour events feed the trending, behavioral and collaborative recommendations.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from supabase import Client

from storefront_admin.core.database import get_supabase


class ProductRepository:
    """Read access to `products` plus the behaviour tracking table"""

    BEHAVIOR_TABLE = "user_behavior_tracking"

    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_supabase()
        return self._client

    def find_active_for_sitemap(self, store_id: str) -> List[dict]:
        result = (
            self.client.table("products")
            .select("id, slug, updated_at, created_at")
            .eq("store_id", store_id)
            .eq("is_active", True)
            .order("created_at", desc=False)
            .execute()
        )
        return result.data or []

    def find_by_ids(self, store_id: str, product_ids: List[str]) -> List[dict]:
        if not product_ids:
            return []
        result = (
            self.client.table("products")
            .select("id, name, slug, price, category, tags, image_url")
            .eq("store_id", store_id)
            .eq("is_active", True)
            .in_("id", product_ids)
            .execute()
        )
        return result.data or []

    def find_by_id(self, store_id: str, product_id: str) -> Optional[dict]:
        rows = self.find_by_ids(store_id, [product_id])
        return rows[0] if rows else None

    def find_similar(self, product_id: str, limit: int = 10) -> List[dict]:
        """Similar products computed by the `find_similar_products` RPC"""
        result = self.client.rpc(
            "find_similar_products",
            {"target_product_id": product_id, "limit_count": limit},
        ).execute()
        return result.data or []

    def find_behavior_since(self, store_id: str, since: datetime, actions: List[str]) -> List[dict]:
        result = (
            self.client.table(self.BEHAVIOR_TABLE)
            .select("product_id, action, timestamp")
            .eq("store_id", store_id)
            .gte("timestamp", since.isoformat())
            .in_("action", actions)
            .execute()
        )
        return result.data or []

    def find_user_behavior(self, store_id: str, user_id: str, limit: int = 100) -> List[dict]:
        """A shopper's latest interactions in one store, newest first"""
        result = (
            self.client.table(self.BEHAVIOR_TABLE)
            .select("product_id, action, timestamp, duration, category, price")
            .eq("store_id", store_id)
            .eq("user_id", user_id)
            .order("timestamp", desc=True)
            .limit(limit)
            .execute()
        )
        return result.data or []

    def find_similar_users(self, user_id: str, limit: int = 50) -> List[str]:
        """Shoppers with overlapping behaviour, from the `find_similar_users` RPC"""
        result = self.client.rpc(
            "find_similar_users",
            {"target_user_id": user_id, "limit_count": limit},
        ).execute()
        return [str(row["user_id"]) for row in result.data or [] if row.get("user_id")]

    def find_purchases_by_users(self, store_id: str, user_ids: List[str]) -> List[dict]:
        if not user_ids:
            return []
        result = (
            self.client.table(self.BEHAVIOR_TABLE)
            .select("product_id, user_id")
            .eq("store_id", store_id)
            .eq("action", "purchase")
            .in_("user_id", user_ids)
            .execute()
        )
        return result.data or []

    def insert_behavior(self, event: Dict[str, Any]) -> None:
        self.client.table(self.BEHAVIOR_TABLE).insert(event).execute()
