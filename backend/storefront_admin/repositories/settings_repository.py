"""
Settings Repositories - notification settings and tax configurations

Both live in their own tables keyed by store_id.
"""
import logging
from typing import Any, Dict, List, Optional

from supabase import Client

from storefront_admin.core.database import get_supabase
from storefront_admin.domain.commerce import TaxConfiguration
from storefront_admin.domain.notifications import NotificationSettings

logger = logging.getLogger(__name__)


class _SupabaseRepository:
    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_supabase()
        return self._client


class NotificationSettingsRepository(_SupabaseRepository):
    """Access to `store_notification_settings` (one row per store)"""

    TABLE = "store_notification_settings"

    def get_or_create(self, store_id: str) -> NotificationSettings:
        """
        Load the store's notification settings

        Order of attempts:
        1. RPC get_or_create_store_notification_settings (creates the row)
        2. Direct select on the table, when the RPC is missing or fails
        3. Defaults, when no row exists yet (not persisted until saved)
        """
        try:
            result = self.client.rpc(
                "get_or_create_store_notification_settings",
                {"p_store_id": store_id},
            ).execute()
            row = result.data[0] if isinstance(result.data, list) and result.data else result.data
            if row:
                return NotificationSettings(**row)
        except Exception as e:
            logger.warning(
                "Notification settings RPC failed, falling back to table read",
                extra={"store_id": store_id, "error": str(e)}
            )

        row = self.find_by_store_id(store_id)
        if row is not None:
            return row

        return NotificationSettings.defaults_for(store_id)

    def find_by_store_id(self, store_id: str) -> Optional[NotificationSettings]:
        result = (
            self.client.table(self.TABLE)
            .select("*")
            .eq("store_id", store_id)
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return NotificationSettings(**result.data[0])

    def upsert(self, settings: NotificationSettings) -> NotificationSettings:
        result = (
            self.client.table(self.TABLE)
            .upsert(settings.model_dump(), on_conflict="store_id")
            .execute()
        )
        if result.data:
            return NotificationSettings(**result.data[0])
        return settings


class TaxConfigurationRepository(_SupabaseRepository):
    """CRUD on `tax_configurations`"""

    TABLE = "tax_configurations"

    def find_all_for_store(self, store_id: str) -> List[TaxConfiguration]:
        result = (
            self.client.table(self.TABLE)
            .select("*")
            .eq("store_id", store_id)
            .order("priority", desc=True)
            .execute()
        )
        return [TaxConfiguration(**row) for row in (result.data or [])]

    def find_by_id(self, store_id: str, tax_id: str) -> Optional[TaxConfiguration]:
        result = (
            self.client.table(self.TABLE)
            .select("*")
            .eq("id", tax_id)
            .eq("store_id", store_id)
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return TaxConfiguration(**result.data[0])

    def create(self, store_id: str, data: Dict[str, Any]) -> TaxConfiguration:
        result = (
            self.client.table(self.TABLE)
            .insert({**data, "store_id": store_id})
            .execute()
        )
        if not result.data:
            raise RuntimeError("Tax configuration insert returned no row")
        return TaxConfiguration(**result.data[0])

    def update(self, store_id: str, tax_id: str, updates: Dict[str, Any]) -> Optional[TaxConfiguration]:
        result = (
            self.client.table(self.TABLE)
            .update(updates)
            .eq("id", tax_id)
            .eq("store_id", store_id)
            .execute()
        )
        if not result.data:
            return None
        return TaxConfiguration(**result.data[0])

    def delete(self, store_id: str, tax_id: str) -> bool:
        result = (
            self.client.table(self.TABLE)
            .delete()
            .eq("id", tax_id)
            .eq("store_id", store_id)
            .execute()
        )
        return bool(result.data)
