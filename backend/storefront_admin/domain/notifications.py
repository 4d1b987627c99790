"""
Store Notification Settings Domain Model

One row per store in `store_notification_settings`.
"""
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"

# Email toggles shown on the notifications tab, in display order
NOTIFICATION_TYPES = [
    ("email_new_order", "New order"),
    ("email_order_status_change", "Order status change"),
    ("email_order_cancelled", "Order cancelled"),
    ("email_order_refund", "Refund"),
    ("email_payment_received", "Payment received"),
    ("email_payment_failed", "Payment failed"),
    ("email_low_stock", "Low stock"),
    ("email_out_of_stock", "Out of stock"),
    ("email_new_review", "New review"),
    ("email_new_question", "New question"),
    ("email_withdrawal_request", "Withdrawal request"),
    ("email_withdrawal_completed", "Withdrawal completed"),
    ("email_domain_verified", "Domain verified"),
    ("email_ssl_expiring", "SSL expiring soon"),
    ("email_ssl_expired", "SSL expired"),
]


class NotificationPreferences(BaseModel):
    """Editable part of the settings (request body of a save)"""
    email_enabled: bool = True
    notification_email: Optional[str] = Field(None, pattern=r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

    email_new_order: bool = True
    email_order_status_change: bool = True
    email_order_cancelled: bool = True
    email_order_refund: bool = True
    email_payment_received: bool = True
    email_payment_failed: bool = True
    email_low_stock: bool = True
    email_out_of_stock: bool = False
    email_new_review: bool = True
    email_new_question: bool = True
    email_withdrawal_request: bool = True
    email_withdrawal_completed: bool = True
    email_domain_verified: bool = True
    email_ssl_expiring: bool = True
    email_ssl_expired: bool = True

    notification_frequency: Literal["immediate", "hourly", "daily", "weekly"] = "immediate"
    quiet_hours_enabled: bool = False
    quiet_hours_start: str = Field("22:00", pattern=HHMM_PATTERN)
    quiet_hours_end: str = Field("08:00", pattern=HHMM_PATTERN)
    quiet_hours_timezone: str = "Africa/Ouagadougou"
    critical_alerts_enabled: bool = True

    model_config = ConfigDict(extra="ignore")

    @field_validator("quiet_hours_start", "quiet_hours_end", mode="before")
    @classmethod
    def trim_seconds(cls, value):
        # Postgres `time` columns come back as HH:MM:SS
        if isinstance(value, str) and len(value) == 8:
            return value[:5]
        return value


class NotificationSettings(NotificationPreferences):
    store_id: str

    @classmethod
    def defaults_for(cls, store_id: str) -> "NotificationSettings":
        return cls(store_id=store_id)
