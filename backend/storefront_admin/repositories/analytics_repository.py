"""
Analytics Repository - reads behind the store analytics tab

Every method is a single blocking table call. The analytics service runs
them concurrently in worker threads and absorbs individual failures.
"""
from datetime import datetime
from typing import List, Optional

from supabase import Client

from storefront_admin.core.database import get_supabase

ORDER_COLUMNS = "id, order_number, total_amount, status, created_at"
STORE_VIEW_EVENT = "store_view"


class AnalyticsRepository:
    """Orders, customers, products and view events scoped to one store"""

    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_supabase()
        return self._client

    def get_active_products(self, store_id: str) -> List[dict]:
        result = (
            self.client.table("products")
            .select("id, name, price, sales_count")
            .eq("store_id", store_id)
            .eq("is_active", True)
            .execute()
        )
        return result.data or []

    def get_orders_between(
        self,
        store_id: str,
        start: datetime,
        end: datetime,
        include_end: bool = True
    ) -> List[dict]:
        """Orders created in [start, end] (or [start, end) when include_end is False)"""
        query = (
            self.client.table("orders")
            .select(ORDER_COLUMNS)
            .eq("store_id", store_id)
            .gte("created_at", start.isoformat())
        )
        query = query.lte("created_at", end.isoformat()) if include_end else query.lt("created_at", end.isoformat())
        return query.execute().data or []

    def count_customers_between(
        self,
        store_id: str,
        start: datetime,
        end: datetime,
        include_end: bool = True
    ) -> int:
        query = (
            self.client.table("customers")
            .select("id", count="exact", head=True)
            .eq("store_id", store_id)
            .gte("created_at", start.isoformat())
        )
        query = query.lte("created_at", end.isoformat()) if include_end else query.lt("created_at", end.isoformat())
        return query.execute().count or 0

    def count_store_views_between(
        self,
        store_id: str,
        start: datetime,
        end: datetime,
        include_end: bool = True
    ) -> int:
        """Store views from `store_analytics_events` (the table may not exist)"""
        query = (
            self.client.table("store_analytics_events")
            .select("id", count="exact", head=True)
            .eq("store_id", store_id)
            .eq("event_type", STORE_VIEW_EVENT)
            .gte("created_at", start.isoformat())
        )
        query = query.lte("created_at", end.isoformat()) if include_end else query.lt("created_at", end.isoformat())
        return query.execute().count or 0

    def get_recent_orders(self, store_id: str, limit: int = 10) -> List[dict]:
        result = (
            self.client.table("orders")
            .select(ORDER_COLUMNS)
            .eq("store_id", store_id)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return result.data or []

    def get_order_history(self, store_id: str) -> List[dict]:
        """Every order of the store, oldest first (monthly trend)"""
        result = (
            self.client.table("orders")
            .select("id, total_amount, created_at")
            .eq("store_id", store_id)
            .order("created_at", desc=False)
            .execute()
        )
        return result.data or []

    def get_view_history(self, store_id: str) -> List[dict]:
        """Every store view event, oldest first (monthly trend)"""
        result = (
            self.client.table("store_analytics_events")
            .select("created_at")
            .eq("store_id", store_id)
            .eq("event_type", STORE_VIEW_EVENT)
            .order("created_at", desc=False)
            .execute()
        )
        return result.data or []
