"""Shared asyncpg pool for the rounds and handicap record repositories."""

import asyncpg
import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

# Tables the handicap endpoints read from; see schema.sql.
REQUIRED_TABLES = (
    "users.rounds",
    "users.hole_scores",
    "users.handicap_records",
    "users.handicap_latest",
)


class DatabasePool:
    """Owns the one pool the API and CLI share for a process."""

    def __init__(self):
        self._pool: Optional[asyncpg.Pool] = None

    async def initialize(
        self,
        dsn: Optional[str] = None,
        *,
        min_size: int = 2,
        max_size: int = 10,
    ) -> None:
        """Open the pool once, before the first repository call.

        The DSN defaults to DATABASE_URL; when neither is set asyncpg reads
        the PG* variables. A second call is a no-op.
        """
        if self._pool is not None:
            return
        self._pool = await asyncpg.create_pool(
            dsn=dsn or os.environ.get("DATABASE_URL"),
            min_size=min_size,
            max_size=max_size,
        )
        logger.info("database pool ready min_size=%s max_size=%s", min_size, max_size)

    async def close(self) -> None:
        if self._pool is None:
            return
        await self._pool.close()
        self._pool = None
        logger.info("database pool closed")

    @property
    def pool(self) -> asyncpg.Pool:
        """The open pool; RuntimeError before initialize() or after close()."""
        if self._pool is None:
            raise RuntimeError("Database pool not initialized. Call await db.initialize() first.")
        return self._pool

    async def health_check(self) -> bool:
        """True when the pool answers and the round and handicap tables exist."""
        try:
            async with self.pool.acquire() as conn:
                missing = [
                    table for table in REQUIRED_TABLES
                    if await conn.fetchval("SELECT to_regclass($1::text)", table) is None
                ]
        except (RuntimeError, OSError, asyncpg.PostgresError) as e:
            logger.warning("database health check failed: %s", e)
            return False
        if missing:
            logger.warning("database schema incomplete missing=%s", ",".join(missing))
            return False
        return True


db = DatabasePool()
