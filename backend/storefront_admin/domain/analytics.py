"""
Store Analytics Domain Models

Period-over-period performance of a store, as shown on the analytics tab.
"""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class TimeRange(str, Enum):
    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    LAST_90_DAYS = "90d"
    LAST_YEAR = "1y"


class PeriodBounds(BaseModel):
    """Current window [current_start, current_end] and previous [previous_start, previous_end)"""
    current_start: datetime
    current_end: datetime
    previous_start: datetime
    previous_end: datetime


class RecentOrder(BaseModel):
    id: str
    order_number: Optional[str] = None
    total_amount: float = 0.0
    status: Optional[str] = None
    created_at: Optional[datetime] = None


class TopProduct(BaseModel):
    id: str
    name: str
    price: float = 0.0
    sales_count: int = 0


class MonthlyStat(BaseModel):
    month: str = Field(..., description="YYYY-MM")
    label: str = Field(..., description="Short month name")
    views: int = 0
    orders: int = 0
    revenue: float = 0.0


class StoreAnalytics(BaseModel):
    store_id: str
    time_range: TimeRange
    total_views: int = 0
    total_orders: int = 0
    total_revenue: float = 0.0
    total_customers: int = 0
    views_growth: float = 0.0
    orders_growth: float = 0.0
    revenue_growth: float = 0.0
    customers_growth: float = 0.0
    recent_orders: List[RecentOrder] = Field(default_factory=list)
    top_products: List[TopProduct] = Field(default_factory=list)
    monthly_stats: List[MonthlyStat] = Field(default_factory=list)
    generated_at: datetime
