from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from .settings import Settings

logger = logging.getLogger(__name__)

Params = Sequence[Any]


class StoreError(Exception):
    """
    Raised when a statement cannot be executed against the store.

    Wraps connection failures, pool timeouts and any error reported by the
    database; the original exception is kept as ``__cause__``.
    """


# PUBLIC_INTERFACE
class Database:
    """
    Owner of the PostgreSQL connection pool.

    Handlers never see connections: each call borrows one connection for a
    single statement and gives it back, so statements run concurrently up to
    the pool's maximum size. Connections are in autocommit mode and return
    rows as dicts.
    """

    def __init__(
        self,
        conninfo: str,
        *,
        min_size: int = 1,
        max_size: int = 10,
        timeout: float = 30.0,
        connect_timeout: float = 10.0,
        shutdown_timeout: float = 10.0,
    ) -> None:
        self._connect_timeout = connect_timeout
        self._shutdown_timeout = shutdown_timeout
        self._pool = AsyncConnectionPool(
            conninfo,
            min_size=min_size,
            max_size=max_size,
            timeout=timeout,
            kwargs={"autocommit": True, "row_factory": dict_row},
            name="tasks",
            open=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.conninfo,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            timeout=settings.db_pool_timeout,
            connect_timeout=settings.db_connect_timeout,
            shutdown_timeout=settings.db_shutdown_timeout,
        )

    @property
    def closed(self) -> bool:
        return self._pool.closed

    async def open(self) -> None:
        """
        Open the pool and check that the database answers.

        An unreachable database is logged, not raised: the pool keeps
        reconnecting in the background and each statement reports its own
        failure until it succeeds.
        """
        await self._pool.open(wait=False)
        try:
            async with self._pool.connection(timeout=self._connect_timeout) as conn:
                await conn.execute("SELECT 1")
        except psycopg.Error as exc:
            logger.error("Could not connect to the database: %s", exc)
            return
        logger.info("Database connection pool ready (max %d connections)", self._pool.max_size)

    async def close(self) -> None:
        """
        Stop lending connections, wait for in-flight statements, then release
        every connection. Safe to call more than once.
        """
        if self._pool.closed:
            return
        await self._pool.close(timeout=self._shutdown_timeout)
        logger.info("Database connection pool closed")

    async def fetch_all(self, query: str, params: Params = ()) -> List[dict]:
        """Run one statement and return all of its rows (empty if it returns none)."""
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(query, params)
                if cur.description is None:
                    return []
                return await cur.fetchall()
        except psycopg.Error as exc:
            raise StoreError(str(exc)) from exc

    async def fetch_one(self, query: str, params: Params = ()) -> Optional[dict]:
        """Run one statement and return its first row, or None."""
        rows = await self.fetch_all(query, params)
        return rows[0] if rows else None

    async def execute(self, query: str, params: Params = ()) -> None:
        """Run one statement, discarding any rows."""
        await self.fetch_all(query, params)
