"""
Async database access helpers (raw SQL) using asyncpg.

The pool is created once in the app lifespan (see `api/main.py`) from
`Settings`, kept on `app.state`, and shared by every request.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from .config import Settings
from .errors import StoreError

BACKEND = "database"

logger = logging.getLogger(__name__)


class RowSource(Protocol):
    """The slice of `asyncpg.Pool` the services rely on."""

    async def fetchrow(self, query: str, *args: Any) -> Any: ...


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url(settings: Settings) -> str:
    url = settings.database_url
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


async def create_pool(settings: Settings) -> asyncpg.Pool:
    pool = await asyncpg.create_pool(
        dsn=database_url(settings),
        min_size=settings.database_pool_min_size,
        max_size=settings.database_pool_max_size,
        command_timeout=settings.database_command_timeout,
    )
    logger.info(
        "db_pool_ready min_size=%s max_size=%s",
        settings.database_pool_min_size,
        settings.database_pool_max_size,
    )
    return pool


async def close_pool(pool: asyncpg.Pool | None) -> None:
    if pool is None:
        return None
    await pool.close()


def _record_to_dict(record: Any) -> dict[str, Any]:
    return dict(record)


async def fetch_one(source: RowSource, sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).

    Driver and connection failures are re-raised as StoreError.
    """
    try:
        row = await source.fetchrow(sql, *args)
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError) as exc:
        raise StoreError(BACKEND, "query_failed", f"{type(exc).__name__}: {exc}") from exc
    return _record_to_dict(row) if row is not None else None
