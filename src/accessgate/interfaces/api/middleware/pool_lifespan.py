"""Pool lifespan middleware - opens the policy store pool with the ASGI app."""

import logging
from typing import Any

from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)


class PoolLifespanMiddleware:
    """Opens the connection pool on startup and closes it on shutdown."""

    def __init__(self, pool: AsyncConnectionPool, wait_timeout: float = 30.0) -> None:
        self._pool = pool
        self._wait_timeout = wait_timeout

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Open pool and wait for min_size connections, so readiness means reachable."""
        await self._pool.open(wait=True, timeout=self._wait_timeout)
        logger.info("Policy store pool opened (%s)", self._pool.name)

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Close pool when ASGI server shuts down."""
        await self._pool.close()
        logger.info("Policy store pool closed")
