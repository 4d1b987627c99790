"""
Storefront Admin - Backend API
Store configuration, SEO scoring, custom domains and analytics for merchants
"""
import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables before settings are read
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

from storefront_admin.api import (  # noqa: E402
    analytics,
    commerce,
    domains,
    exports,
    location,
    notifications,
    seo,
    stores,
    storefront,
    tracking,
)
from storefront_admin.core.config import settings  # noqa: E402
from storefront_admin.core.database import CONNECTION_TIMEOUT, DatabasePing, ping_database  # noqa: E402
from storefront_admin.core.logging_config import setup_logging  # noqa: E402

setup_logging(settings.LOG_LEVEL)

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

# Merchant (authenticated) routers
app.include_router(stores.router, prefix="/api/v1/stores", tags=["Stores"])
app.include_router(seo.router, prefix="/api/v1/seo", tags=["SEO"])
app.include_router(domains.router, prefix="/api/v1/domains", tags=["Custom Domains"])
app.include_router(analytics.router, prefix="/api/v1/analytics", tags=["Analytics"])
app.include_router(exports.router, prefix="/api/v1/exports", tags=["Exports"])
app.include_router(notifications.router, prefix="/api/v1/notifications", tags=["Notifications"])
app.include_router(commerce.router, prefix="/api/v1/commerce", tags=["Commerce"])
app.include_router(tracking.router, prefix="/api/v1/tracking", tags=["Tracking"])
app.include_router(location.router, prefix="/api/v1/location", tags=["Location"])

# Shopper-facing router (no auth)
app.include_router(storefront.router, prefix="/api/v1/public/stores", tags=["Storefront"])


@app.get("/")
async def root():
    """Root endpoint - API status"""
    return {
        "message": "Storefront Admin API",
        "status": "online",
        "version": settings.API_VERSION,
    }


@app.get("/health")
def health():
    """
    Liveness plus a database round-trip

    Declared sync so FastAPI runs the blocking database check in its threadpool.
    """
    try:
        ping = ping_database()
    except Exception as e:
        logger.error("Health check crashed", extra={"error": str(e)})
        ping = DatabasePing(connected=False, error=str(e))

    return {
        "status": "healthy" if ping.connected else "degraded",
        "service": "storefront-admin-api",
        "version": settings.API_VERSION,
        "database": {
            "status": "connected" if ping.connected else "disconnected",
            "latency_ms": ping.latency_ms,
            "error": ping.error,
            "attempts": ping.attempts,
            "connection_timeout_s": CONNECTION_TIMEOUT,
        },
    }


@app.get("/api/v1/status")
async def api_status():
    """Configuration status of the external services"""
    return {
        "supabase": {
            "connected": bool(settings.SUPABASE_URL),
            "status": "configured" if settings.SUPABASE_URL else "not_configured"
        },
        "auth": {"jwt_secret_configured": bool(settings.SUPABASE_JWT_SECRET)},
        "cron": {"configured": bool(settings.CRON_API_KEY)},
        "dns_resolver": settings.DNS_RESOLVER_URL,
        "geocoder": settings.GEOCODER_URL,
    }
