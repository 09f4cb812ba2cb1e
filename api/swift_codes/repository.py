"""
SWIFT code persistence (raw SQL over the `banks` table).

Every read goes to the database; nothing is cached here.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

import asyncpg

from core import db

from .errors import DuplicateKeyError, NotFoundError, StorageError

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS banks (
    swift_code TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    address TEXT NOT NULL,
    country_iso2_code TEXT NOT NULL,
    country_name TEXT NOT NULL,
    is_headquarter BOOLEAN NOT NULL
)
"""

_COLUMNS = "swift_code, name, address, country_iso2_code, country_name, is_headquarter"

_STORAGE_FAILURES = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


@dataclass
class SwiftRecord:
    swift_code: str
    bank_name: str
    address: str
    country_iso2: str
    country_name: str
    is_headquarter: bool


def _row_to_record(row: dict[str, Any]) -> SwiftRecord:
    return SwiftRecord(
        swift_code=str(row["swift_code"]),
        bank_name=str(row["name"]),
        address=str(row["address"]),
        country_iso2=str(row["country_iso2_code"]),
        country_name=str(row["country_name"]),
        is_headquarter=bool(row["is_headquarter"]),
    )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SwiftCodeRepository:
    def __init__(self, executor: Any) -> None:
        # asyncpg pool or connection
        self._executor = executor

    async def create_schema(self) -> None:
        try:
            await db.execute(SCHEMA_SQL, executor=self._executor)
        except _STORAGE_FAILURES as exc:
            raise StorageError(f"failed to create banks table: {exc}") from exc

    async def find_by_code(self, swift_code: str) -> SwiftRecord | None:
        try:
            row = await db.fetch_one(
                f"""
                SELECT {_COLUMNS}
                FROM banks
                WHERE swift_code = $1
                """,
                swift_code,
                executor=self._executor,
            )
        except _STORAGE_FAILURES as exc:
            raise StorageError(f"failed to fetch SWIFT code {swift_code!r}: {exc}") from exc
        return _row_to_record(row) if row is not None else None

    async def find_branches(self, hq_prefix: str) -> list[SwiftRecord]:
        """
        Non-headquarter rows whose code starts with the 8-character prefix.
        """
        try:
            rows = await db.fetch_all(
                f"""
                SELECT {_COLUMNS}
                FROM banks
                WHERE swift_code LIKE $1 || '%'
                  AND is_headquarter = FALSE
                """,
                _escape_like(hq_prefix),
                executor=self._executor,
            )
        except _STORAGE_FAILURES as exc:
            raise StorageError(f"failed to fetch branches for {hq_prefix!r}: {exc}") from exc
        return [_row_to_record(r) for r in rows]

    async def find_by_country(self, country_iso2: str) -> list[SwiftRecord]:
        try:
            rows = await db.fetch_all(
                f"""
                SELECT {_COLUMNS}
                FROM banks
                WHERE country_iso2_code = $1
                """,
                country_iso2,
                executor=self._executor,
            )
        except _STORAGE_FAILURES as exc:
            raise StorageError(f"failed to fetch SWIFT codes for country {country_iso2!r}: {exc}") from exc
        return [_row_to_record(r) for r in rows]

    async def insert(self, record: SwiftRecord) -> None:
        try:
            await db.execute(
                f"""
                INSERT INTO banks ({_COLUMNS})
                VALUES ($1, $2, $3, $4, $5, $6)
                """,
                record.swift_code,
                record.bank_name,
                record.address,
                record.country_iso2,
                record.country_name,
                record.is_headquarter,
                executor=self._executor,
            )
        except asyncpg.UniqueViolationError as exc:
            raise DuplicateKeyError(f"SWIFT code {record.swift_code!r} already exists") from exc
        except _STORAGE_FAILURES as exc:
            raise StorageError(f"failed to insert SWIFT code {record.swift_code!r}: {exc}") from exc

    async def delete_by_code(self, swift_code: str) -> None:
        try:
            status = await db.execute(
                """
                DELETE FROM banks
                WHERE swift_code = $1
                """,
                swift_code,
                executor=self._executor,
            )
        except _STORAGE_FAILURES as exc:
            raise StorageError(f"failed to delete SWIFT code {swift_code!r}: {exc}") from exc
        if db.affected_rows(status) == 0:
            raise NotFoundError(f"no SWIFT code found with value {swift_code!r}")
