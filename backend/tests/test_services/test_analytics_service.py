"""
Unit tests for store analytics aggregation

The repository is a MagicMock; reads run in worker threads exactly as in
production, so failures injected with side_effect exercise the fallback path.
"""
import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from storefront_admin.domain.analytics import MonthlyStat, TimeRange
from storefront_admin.services.analytics_service import (
    AnalyticsService,
    build_monthly_stats,
    calculate_growth,
    compute_periods,
    csv_filename,
    export_monthly_stats_csv,
    sum_revenue,
)


class TestCalculateGrowth:

    @pytest.mark.parametrize("current,previous,expected", [
        (0, 0, 0.0),
        (5, 0, 100.0),
        (150, 100, 50.0),
        (50, 100, -50.0),
        (50, 200, -75.0),
        (1, 3, -66.67),
    ])
    def test_growth(self, current, previous, expected):
        assert calculate_growth(current, previous) == expected


class TestComputePeriods:

    def test_seven_days(self, fixed_now):
        periods = compute_periods(fixed_now, TimeRange.LAST_7_DAYS)

        assert periods.current_end == fixed_now
        assert periods.current_start == fixed_now - timedelta(days=7)
        assert periods.previous_start == fixed_now - timedelta(days=14)
        assert periods.previous_end == periods.current_start

    def test_one_year_uses_calendar_years(self):
        now = datetime(2024, 2, 29, 10, 0, tzinfo=timezone.utc)

        periods = compute_periods(now, TimeRange.LAST_YEAR)

        assert periods.current_start == datetime(2023, 2, 28, 10, 0, tzinfo=timezone.utc)
        assert periods.previous_start == datetime(2022, 2, 28, 10, 0, tzinfo=timezone.utc)


class TestMonthlyStats:

    def test_twelve_buckets_ending_with_current_month(self, fixed_now):
        stats = build_monthly_stats([], [], fixed_now)

        assert len(stats) == 12
        assert stats[0].month == "2023-04"
        assert stats[-1].month == "2024-03"
        assert stats[-1].label == "Mar"

    def test_last_second_of_month_lands_in_that_month(self, fixed_now):
        orders = [
            {"created_at": "2024-01-31T23:59:59.500000+00:00", "total_amount": "1500.50"},
            {"created_at": "2024-02-01T00:00:00Z", "total_amount": 200},
            {"created_at": "2023-03-31T10:00:00Z", "total_amount": 999},
        ]
        views = [{"created_at": "2024-01-15T09:00:00+00:00"}, {"created_at": "2024-03-01T00:00:00+00:00"}]

        stats = {stat.month: stat for stat in build_monthly_stats(orders, views, fixed_now)}

        assert stats["2024-01"].orders == 1
        assert stats["2024-01"].revenue == 1500.5
        assert stats["2024-01"].views == 1
        assert stats["2024-02"].orders == 1
        assert stats["2024-03"].views == 1
        # Outside the 12-month window
        assert sum(stat.orders for stat in stats.values()) == 2


class TestCsvExport:

    def test_header_plus_one_line_per_month(self, fixed_now):
        stats = build_monthly_stats([], [], fixed_now)

        lines = export_monthly_stats_csv(stats).split("\n")

        assert len(lines) == len(stats) + 1
        assert lines[0] == "Month,Views,Orders,Revenue"

    def test_row_format(self):
        csv = export_monthly_stats_csv([
            MonthlyStat(month="2024-01", label="Jan", views=10, orders=2, revenue=1500.0),
            MonthlyStat(month="2024-02", label="Feb", views=0, orders=1, revenue=99.5),
        ])

        assert csv == "Month,Views,Orders,Revenue\n2024-01,10,2,1500\n2024-02,0,1,99.50"

    def test_filename(self, fixed_now):
        assert csv_filename(fixed_now) == "store-analytics-2024-03-15.csv"


def test_sum_revenue_accepts_strings_and_numbers():
    assert sum_revenue([{"total_amount": "10.25"}, {"total_amount": 5}, {"total_amount": None}]) == 15.25


class TestAnalyticsService:
    """Test the concurrent fan-out and its failure absorption"""

    def _repository(self):
        repo = MagicMock()
        repo.get_active_products.return_value = [
            {"id": f"p{i}", "name": f"Product {i}", "price": "10", "sales_count": i}
            for i in range(1, 7)
        ] + [{"id": "p0", "name": "Never sold", "price": 3, "sales_count": None}]

        def orders_between(store_id, start, end, include_end=True):
            if include_end:
                return [
                    {"id": "o1", "total_amount": "2000.50", "created_at": "2024-03-10T10:00:00Z"},
                    {"id": "o2", "total_amount": 500, "created_at": "2024-03-12T10:00:00Z"},
                ]
            raise RuntimeError("connection reset")

        repo.get_orders_between.side_effect = orders_between
        repo.count_customers_between.side_effect = (
            lambda store_id, start, end, include_end=True: 4 if include_end else 2
        )
        repo.count_store_views_between.side_effect = RuntimeError('relation "store_analytics_events" does not exist')
        repo.get_recent_orders.return_value = [
            {"id": "o2", "order_number": "ORD-2", "total_amount": "500", "status": "pending",
             "created_at": "2024-03-12T10:00:00Z"},
        ]
        repo.get_order_history.return_value = [
            {"id": "o1", "total_amount": "2000.50", "created_at": "2024-03-10T10:00:00Z"},
        ]
        repo.get_view_history.side_effect = RuntimeError("timeout")
        return repo

    def test_failed_reads_degrade_to_empty(self, fixed_now):
        # Arrange
        service = AnalyticsService(self._repository())

        # Act
        analytics = asyncio.run(service.get_store_analytics("store-1", TimeRange.LAST_30_DAYS, now=fixed_now))

        # Assert: totals from the reads that worked
        assert analytics.total_orders == 2
        assert analytics.total_revenue == 2500.5
        assert analytics.total_customers == 4
        assert analytics.customers_growth == 100.0
        # previous orders failed -> treated as none
        assert analytics.orders_growth == 100.0
        assert analytics.revenue_growth == 100.0
        # views table missing -> zero, not an error
        assert analytics.total_views == 0
        assert analytics.views_growth == 0.0
        assert [month.views for month in analytics.monthly_stats] == [0] * 12

    def test_top_products_and_recent_orders(self, fixed_now):
        service = AnalyticsService(self._repository())

        analytics = asyncio.run(service.get_store_analytics("store-1", now=fixed_now))

        assert [p.id for p in analytics.top_products] == ["p6", "p5", "p4", "p3", "p2"]
        assert analytics.top_products[0].price == 10.0
        assert analytics.recent_orders[0].order_number == "ORD-2"
        assert analytics.recent_orders[0].total_amount == 500.0
        assert analytics.monthly_stats[-1].orders == 1

    def test_previous_window_is_half_open(self, fixed_now):
        repo = self._repository()
        service = AnalyticsService(repo)

        asyncio.run(service.get_store_analytics("store-1", TimeRange.LAST_7_DAYS, now=fixed_now))

        calls = repo.count_customers_between.call_args_list
        previous = [c for c in calls if c.kwargs.get("include_end") is False]
        assert len(previous) == 1
        assert previous[0].args[1] == fixed_now - timedelta(days=14)
        assert previous[0].args[2] == fixed_now - timedelta(days=7)
