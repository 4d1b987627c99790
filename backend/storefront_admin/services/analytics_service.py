"""
Analytics Service - period-over-period store analytics

Runs the analytics reads concurrently (one worker thread per blocking
supabase call) and degrades any single failed read to an empty value,
so the tab always renders with whatever data could be fetched.
"""
import asyncio
import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Iterable, List, Optional, Tuple

from storefront_admin.domain.analytics import (
    MonthlyStat,
    PeriodBounds,
    RecentOrder,
    StoreAnalytics,
    TimeRange,
    TopProduct,
)
from storefront_admin.repositories.analytics_repository import AnalyticsRepository

logger = logging.getLogger(__name__)

RANGE_DAYS = {
    TimeRange.LAST_7_DAYS: 7,
    TimeRange.LAST_30_DAYS: 30,
    TimeRange.LAST_90_DAYS: 90,
}
MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
MONTHS_IN_TREND = 12
TOP_PRODUCTS_LIMIT = 5
RECENT_ORDERS_LIMIT = 10
CSV_HEADER = "Month,Views,Orders,Revenue"


def _years_ago(moment: datetime, years: int) -> datetime:
    try:
        return moment.replace(year=moment.year - years)
    except ValueError:
        # Feb 29 -> Feb 28
        return moment.replace(year=moment.year - years, day=28)


def compute_periods(now: datetime, time_range: TimeRange) -> PeriodBounds:
    """
    Current window [now - range, now] and previous window
    [now - 2*range, now - range). `1y` steps in calendar years.
    """
    if time_range == TimeRange.LAST_YEAR:
        current_start = _years_ago(now, 1)
        previous_start = _years_ago(now, 2)
    else:
        delta = timedelta(days=RANGE_DAYS[time_range])
        current_start = now - delta
        previous_start = now - 2 * delta

    return PeriodBounds(
        current_start=current_start,
        current_end=now,
        previous_start=previous_start,
        previous_end=current_start,
    )


def calculate_growth(current: float, previous: float) -> float:
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return round((current - previous) / previous * 100, 2)


def to_amount(value: Any) -> float:
    """Order amounts arrive as numbers or numeric strings"""
    if value is None or value == "":
        return 0.0
    try:
        return float(Decimal(str(value)))
    except (InvalidOperation, ValueError):
        logger.warning(f"Ignoring non-numeric order amount: {value!r}")
        return 0.0


def sum_revenue(orders: Iterable[dict]) -> float:
    return round(sum(to_amount(order.get("total_amount")) for order in orders), 2)


def parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            logger.warning(f"Ignoring unparseable timestamp: {value!r}")
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def top_products(products: Iterable[dict], limit: int = TOP_PRODUCTS_LIMIT) -> List[TopProduct]:
    ranked = sorted(products, key=lambda p: p.get("sales_count") or 0, reverse=True)
    return [
        TopProduct(
            id=str(p["id"]),
            name=p.get("name") or "",
            price=to_amount(p.get("price")),
            sales_count=p.get("sales_count") or 0,
        )
        for p in ranked[:limit]
    ]


def month_windows(now: datetime, months: int = MONTHS_IN_TREND) -> List[Tuple[datetime, datetime]]:
    """
    The last `months` calendar months ending with the month of `now`,
    oldest first, as half-open [start, next_start) pairs.
    """
    tz = now.tzinfo or timezone.utc
    year, month = now.year, now.month
    windows = []
    for _ in range(months):
        start = datetime(year, month, 1, tzinfo=tz)
        next_year, next_month = (year + 1, 1) if month == 12 else (year, month + 1)
        windows.append((start, datetime(next_year, next_month, 1, tzinfo=tz)))
        year, month = (year - 1, 12) if month == 1 else (year, month - 1)
    windows.reverse()
    return windows


def build_monthly_stats(orders: List[dict], views: List[dict], now: datetime) -> List[MonthlyStat]:
    """Bucket orders (count + revenue) and views into the last 12 months"""
    windows = month_windows(now)
    stats = [
        MonthlyStat(month=f"{start.year:04d}-{start.month:02d}", label=MONTH_LABELS[start.month - 1])
        for start, _ in windows
    ]

    def bucket_index(created_at: Any) -> Optional[int]:
        moment = parse_timestamp(created_at)
        if moment is None:
            return None
        for index, (start, end) in enumerate(windows):
            if start <= moment < end:
                return index
        return None

    for order in orders:
        index = bucket_index(order.get("created_at"))
        if index is not None:
            stats[index].orders += 1
            stats[index].revenue = round(stats[index].revenue + to_amount(order.get("total_amount")), 2)

    for view in views:
        index = bucket_index(view.get("created_at"))
        if index is not None:
            stats[index].views += 1

    return stats


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:.2f}"


def export_monthly_stats_csv(monthly_stats: List[MonthlyStat]) -> str:
    """CSV with a header line and one line per month, no trailing newline"""
    lines = [CSV_HEADER]
    for stat in monthly_stats:
        lines.append(",".join([
            stat.month,
            str(stat.views),
            str(stat.orders),
            _format_number(stat.revenue),
        ]))
    return "\n".join(lines)


def csv_filename(today: Optional[datetime] = None) -> str:
    today = today or datetime.now(timezone.utc)
    return f"store-analytics-{today.strftime('%Y-%m-%d')}.csv"


class AnalyticsService:
    """
    Aggregates a store's analytics for a time range
    """

    def __init__(self, repository: Optional[AnalyticsRepository] = None):
        self.repository = repository or AnalyticsRepository()

    async def _gather(self, store_id: str, reads: List[Tuple[str, Callable[[], Any], Any]]) -> List[Any]:
        """Run blocking reads concurrently; a failed read yields its fallback"""
        settled = await asyncio.gather(
            *(asyncio.to_thread(read) for _, read, _ in reads),
            return_exceptions=True,
        )
        values = []
        for (name, _, fallback), value in zip(reads, settled):
            if isinstance(value, Exception):
                logger.warning(
                    f"Analytics read '{name}' failed, using empty data",
                    extra={"store_id": store_id, "read": name, "error": str(value)}
                )
                value = fallback
            values.append(value)
        return values

    async def get_store_analytics(
        self,
        store_id: str,
        time_range: TimeRange = TimeRange.LAST_30_DAYS,
        now: Optional[datetime] = None,
    ) -> StoreAnalytics:
        now = now or datetime.now(timezone.utc)
        periods = compute_periods(now, time_range)
        repo = self.repository

        (
            products,
            current_orders,
            previous_orders,
            current_customers,
            previous_customers,
            recent_orders,
            current_views,
            previous_views,
            order_history,
            view_history,
        ) = await self._gather(store_id, [
            ("active_products", lambda: repo.get_active_products(store_id), []),
            ("current_orders", lambda: repo.get_orders_between(
                store_id, periods.current_start, periods.current_end), []),
            ("previous_orders", lambda: repo.get_orders_between(
                store_id, periods.previous_start, periods.previous_end, include_end=False), []),
            ("current_customers", lambda: repo.count_customers_between(
                store_id, periods.current_start, periods.current_end), 0),
            ("previous_customers", lambda: repo.count_customers_between(
                store_id, periods.previous_start, periods.previous_end, include_end=False), 0),
            ("recent_orders", lambda: repo.get_recent_orders(store_id, RECENT_ORDERS_LIMIT), []),
            ("current_views", lambda: repo.count_store_views_between(
                store_id, periods.current_start, periods.current_end), 0),
            ("previous_views", lambda: repo.count_store_views_between(
                store_id, periods.previous_start, periods.previous_end, include_end=False), 0),
            ("order_history", lambda: repo.get_order_history(store_id), []),
            ("view_history", lambda: repo.get_view_history(store_id), []),
        ])

        current_revenue = sum_revenue(current_orders)
        previous_revenue = sum_revenue(previous_orders)

        analytics = StoreAnalytics(
            store_id=store_id,
            time_range=time_range,
            total_views=current_views,
            total_orders=len(current_orders),
            total_revenue=current_revenue,
            total_customers=current_customers,
            views_growth=calculate_growth(current_views, previous_views),
            orders_growth=calculate_growth(len(current_orders), len(previous_orders)),
            revenue_growth=calculate_growth(current_revenue, previous_revenue),
            customers_growth=calculate_growth(current_customers, previous_customers),
            recent_orders=[
                RecentOrder(
                    id=str(order["id"]),
                    order_number=order.get("order_number"),
                    total_amount=to_amount(order.get("total_amount")),
                    status=order.get("status"),
                    created_at=parse_timestamp(order.get("created_at")),
                )
                for order in recent_orders
            ],
            top_products=top_products(products),
            monthly_stats=build_monthly_stats(order_history, view_history, now),
            generated_at=now,
        )

        logger.info(
            f"Analytics computed for store {store_id} ({time_range.value}): "
            f"{analytics.total_orders} orders, {analytics.total_revenue} revenue"
        )
        return analytics
