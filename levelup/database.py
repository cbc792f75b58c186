"""
Database pool management.

The pool is created once at application start-up (see ``levelup.app``) and
shared by every request. When ``DATABASE_URL`` is not configured the pool
stays unset and data endpoints answer 503.
"""

import json
import logging
from typing import Optional

import asyncpg
from fastapi import HTTPException, status

from levelup import config

logger = logging.getLogger(__name__)

# Global db_pool, set at start-up or by tests
db_pool: Optional[asyncpg.Pool] = None


def set_db_pool(pool):
    """Set the global database pool used by request dependencies."""
    global db_pool
    db_pool = pool


def get_db_pool():
    """
    FastAPI dependency returning the configured database pool.

    Raises:
        HTTPException: 503 if the database is not configured
    """
    if db_pool is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not configured"
        )
    return db_pool


async def _init_connection(conn: asyncpg.Connection):
    """Decode json/jsonb columns into Python objects."""
    for type_name in ("json", "jsonb"):
        await conn.set_type_codec(
            type_name,
            encoder=json.dumps,
            decoder=json.loads,
            schema="pg_catalog"
        )


async def create_pool(database_url: Optional[str] = None) -> Optional[asyncpg.Pool]:
    """
    Create the connection pool.

    Args:
        database_url: Connection URL, defaults to ``DATABASE_URL``

    Returns:
        The pool, or None when no URL is configured
    """
    database_url = database_url or config.DATABASE_URL
    if not database_url:
        logger.warning("DATABASE_URL not set, annotation endpoints are disabled")
        return None

    pool = await asyncpg.create_pool(
        database_url,
        min_size=config.DATABASE_MIN_POOL_SIZE,
        max_size=config.DATABASE_MAX_POOL_SIZE,
        init=_init_connection
    )
    logger.info("Database pool ready (%s)", database_url.split("@")[-1])
    return pool
