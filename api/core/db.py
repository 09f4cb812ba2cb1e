"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `api/main.py`).

Connection settings come from the environment: either a full `DATABASE_URL`
or the `DB_USER` / `DB_PASS` / `DB_HOST` / `DB_PORT` / `DB_NAME` set.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import logging
import os
from typing import Any
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

import asyncpg

DEFAULT_PORT = "5432"

logger = logging.getLogger(__name__)

_pool: asyncpg.Pool | None = None


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def _env(name: str) -> str:
    return os.environ.get(name, "").strip()


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def database_url() -> str:
    url = _env("DATABASE_URL")
    if url:
        return _sanitize_database_url(url)

    user = _env("DB_USER")
    password = os.environ.get("DB_PASS", "")
    host = _env("DB_HOST")
    port = _env("DB_PORT") or DEFAULT_PORT
    name = _env("DB_NAME")

    missing = [k for (k, v) in (("DB_USER", user), ("DB_HOST", host), ("DB_NAME", name)) if not v]
    if missing:
        raise RuntimeError(f"Missing database settings: {', '.join(missing)}.")

    credentials = quote(user, safe="")
    if password:
        credentials += ":" + quote(password, safe="")
    return f"postgresql://{credentials}@{host}:{port}/{name}"


async def init_pool() -> asyncpg.Pool:
    global _pool
    if _pool is not None:
        return _pool
    _pool = await asyncpg.create_pool(
        dsn=database_url(),
        min_size=_env_int("DB_POOL_MIN_SIZE", 1),
        max_size=_env_int("DB_POOL_MAX_SIZE", 5),
        command_timeout=_env_int("DB_COMMAND_TIMEOUT", 30),
    )
    logger.info("Database pool opened")
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None
    logger.info("Database pool closed")


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_one(sql: str, *args: Any, executor: Any | None = None) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).

    `executor` is anything with the asyncpg query API (pool or connection);
    the shared pool is used when omitted.
    """
    row = await (executor or pool()).fetchrow(sql, *args)
    return _record_to_dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any, executor: Any | None = None) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    rows = await (executor or pool()).fetch(sql, *args)
    return [_record_to_dict(r) for r in rows]


async def execute(sql: str, *args: Any, executor: Any | None = None) -> str:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL).

    Returns the server status tag, e.g. "DELETE 1".
    """
    return await (executor or pool()).execute(sql, *args)


def affected_rows(status: str) -> int:
    """
    Parse the row count out of a status tag like "DELETE 3" or "INSERT 0 1".
    """
    tail = (status or "").rsplit(" ", 1)[-1]
    return int(tail) if tail.isdigit() else 0
