"""Health check endpoints."""

import asyncio
from typing import Any

import asyncpg

from .config import settings

CONNECT_TIMEOUT_SECONDS = 5.0


async def check_postgresql() -> dict[str, Any]:
    """Check PostgreSQL connectivity and that the transactions table exists.

    Duplicate detection cannot run before the migration has created the
    ``transactions`` table, so a reachable server without it is unhealthy.
    """
    try:
        conn = await asyncio.wait_for(
            asyncpg.connect(
                host=settings.postgres_host,
                port=settings.postgres_port,
                user=settings.postgres_user,
                password=settings.postgres_password,
                database=settings.postgres_db,
            ),
            timeout=CONNECT_TIMEOUT_SECONDS,
        )
        try:
            version = await conn.fetchval("SELECT version()")
            table = await conn.fetchval("SELECT to_regclass('transactions')")
        finally:
            await conn.close()
    except Exception as e:
        return {"status": "unhealthy", "error": str(e)}

    if table is None:
        return {"status": "unhealthy", "error": "transactions table is missing"}
    return {"status": "healthy", "version": version[:50] + "..."}


async def get_health_status() -> dict[str, Any]:
    """Get overall health status."""
    postgres = await check_postgresql()

    return {
        "status": "healthy" if postgres.get("status") == "healthy" else "degraded",
        "services": {
            "postgresql": postgres,
        },
    }
