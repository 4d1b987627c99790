"""
Database access for the storefront admin backend

Two ways in:
- Supabase client (tables and RPC functions) for every business operation
- psycopg2 direct connection, only used by the /health check

The Supabase client is created on first use so the package can be imported
without credentials (tests, tooling).
"""
import logging
import time
from contextlib import closing
from dataclasses import dataclass
from typing import Optional

import psycopg2
from supabase import Client, create_client

from .config import settings

logger = logging.getLogger(__name__)

# Seconds before a direct Postgres connection attempt gives up
CONNECTION_TIMEOUT = 10


# ============================================================================
# Supabase Client
# ============================================================================

_supabase: Optional[Client] = None


def get_supabase() -> Client:
    """
    Return the shared Supabase client, creating it on first call

    Usage:
        @router.get("/data")
        def get_data(sb: Client = Depends(get_supabase)):
            ...

    Raises:
        ValueError if SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is missing
    """
    global _supabase

    if _supabase is None:
        if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
            raise ValueError("Supabase not configured. Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY")
        _supabase = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
        logger.info("Supabase client created")

    return _supabase


# ============================================================================
# Health check (direct Postgres connection)
# ============================================================================

@dataclass
class DatabasePing:
    connected: bool
    latency_ms: Optional[float] = None
    error: Optional[str] = None
    attempts: int = 0


def ping_database(attempts: int = 2, backoff: float = 0.5) -> DatabasePing:
    """
    Round-trip `SELECT 1` over a fresh psycopg2 connection

    Idle SSL sessions on the pooler get dropped now and then, so a failed
    connection is retried with a doubling delay. The last error is reported
    in the result instead of raised. Blocks: call it from a worker thread.
    """
    database_url = settings.DATABASE_URL
    if not database_url:
        return DatabasePing(connected=False, error="DATABASE_URL not configured")

    error = None
    for attempt in range(1, attempts + 1):
        started = time.perf_counter()
        try:
            with closing(psycopg2.connect(database_url, connect_timeout=CONNECTION_TIMEOUT)) as conn:
                with conn.cursor() as cursor:
                    cursor.execute("SELECT 1")
                    cursor.fetchone()
        except psycopg2.OperationalError as e:
            error = str(e).strip()
            logger.warning("Database ping failed", extra={"attempt": attempt, "error": error})
            if attempt < attempts:
                time.sleep(backoff * (2 ** (attempt - 1)))
            continue

        return DatabasePing(
            connected=True,
            latency_ms=round((time.perf_counter() - started) * 1000, 2),
            attempts=attempt,
        )

    return DatabasePing(connected=False, error=error, attempts=attempts)
