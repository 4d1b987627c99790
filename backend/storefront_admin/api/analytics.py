"""
Store Analytics API Endpoints
Period-over-period totals, growth, recent orders, top products and monthly trend
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from storefront_admin.api.deps import get_analytics_service, get_owned_store
from storefront_admin.domain.analytics import TimeRange
from storefront_admin.domain.store import Store
from storefront_admin.services.analytics_service import (
    AnalyticsService,
    csv_filename,
    export_monthly_stats_csv,
)

router = APIRouter()


@router.get("/stores/{store_id}")
async def get_store_analytics(
    time_range: TimeRange = Query(TimeRange.LAST_30_DAYS, alias="range", description="7d, 30d, 90d or 1y"),
    store: Store = Depends(get_owned_store),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """
    Store analytics for the selected range

    Individual reads that fail are reported as empty data, not as errors.
    """
    try:
        analytics = await service.get_store_analytics(store.id, time_range)
        return {"status": "success", "data": analytics.model_dump(mode="json")}
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching analytics: {str(e)}")


@router.get("/stores/{store_id}/export")
async def export_store_analytics(
    store: Store = Depends(get_owned_store),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Monthly trend as a CSV download"""
    try:
        analytics = await service.get_store_analytics(store.id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error exporting analytics: {str(e)}")

    return Response(
        content=export_monthly_stats_csv(analytics.monthly_stats),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{csv_filename(analytics.generated_at)}"'},
    )
