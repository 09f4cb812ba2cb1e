"""
Test doubles for the SWIFT code stack.

`InMemorySwiftRepository` mimics the `banks` table for service and HTTP
tests; `FakePool` stands in for an asyncpg pool in repository tests.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace
from typing import Any

from fastapi.testclient import TestClient

from main import create_app
from swift_codes.errors import DuplicateKeyError, NotFoundError
from swift_codes.repository import SwiftRecord
from swift_codes.service import SwiftCodeService


def make_record(
    swift_code: str,
    *,
    bank_name: str = "Test Bank",
    address: str = "123 Main St",
    country_iso2: str = "US",
    country_name: str = "UNITED STATES",
    is_headquarter: bool | None = None,
) -> SwiftRecord:
    if is_headquarter is None:
        is_headquarter = swift_code.endswith("XXX")
    return SwiftRecord(
        swift_code=swift_code,
        bank_name=bank_name,
        address=address,
        country_iso2=country_iso2,
        country_name=country_name,
        is_headquarter=is_headquarter,
    )


class InMemorySwiftRepository:
    """Keeps insertion order, like a heap table without ORDER BY."""

    def __init__(self, records: list[SwiftRecord] | None = None) -> None:
        self.rows: dict[str, SwiftRecord] = {}
        self.calls: list[tuple[str, Any]] = []
        self.raise_on: dict[str, Exception] = {}
        # Rows returned by find_branches regardless of prefix (to test the extra HQ filter).
        self.extra_branches: list[SwiftRecord] = []
        for record in records or []:
            self.rows[record.swift_code] = record

    def _record_call(self, name: str, arg: Any) -> None:
        self.calls.append((name, arg))
        exc = self.raise_on.get(name)
        if exc is not None:
            raise exc

    async def find_by_code(self, swift_code: str) -> SwiftRecord | None:
        self._record_call("find_by_code", swift_code)
        record = self.rows.get(swift_code)
        return replace(record) if record is not None else None

    async def find_branches(self, hq_prefix: str) -> list[SwiftRecord]:
        self._record_call("find_branches", hq_prefix)
        found = [
            replace(r)
            for r in self.rows.values()
            if r.swift_code.startswith(hq_prefix) and not r.is_headquarter
        ]
        return found + [replace(r) for r in self.extra_branches]

    async def find_by_country(self, country_iso2: str) -> list[SwiftRecord]:
        self._record_call("find_by_country", country_iso2)
        return [replace(r) for r in self.rows.values() if r.country_iso2 == country_iso2]

    async def insert(self, record: SwiftRecord) -> None:
        self._record_call("insert", record)
        if record.swift_code in self.rows:
            raise DuplicateKeyError(f"SWIFT code {record.swift_code!r} already exists")
        self.rows[record.swift_code] = replace(record)

    async def delete_by_code(self, swift_code: str) -> None:
        self._record_call("delete_by_code", swift_code)
        if self.rows.pop(swift_code, None) is None:
            raise NotFoundError(f"no SWIFT code found with value {swift_code!r}")


class FakePool:
    """Records SQL sent through the asyncpg query API."""

    def __init__(
        self,
        *,
        row: dict[str, Any] | None = None,
        rows: list[dict[str, Any]] | None = None,
        status: str = "INSERT 0 1",
        error: Exception | None = None,
    ) -> None:
        self.row = row
        self.rows = rows or []
        self.status = status
        self.error = error
        self.queries: list[tuple[str, tuple[Any, ...]]] = []

    def _record(self, sql: str, args: tuple[Any, ...]) -> None:
        self.queries.append((" ".join(sql.split()), args))
        if self.error is not None:
            raise self.error

    async def fetchrow(self, sql: str, *args: Any) -> dict[str, Any] | None:
        self._record(sql, args)
        return self.row

    async def fetch(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        self._record(sql, args)
        return list(self.rows)

    async def execute(self, sql: str, *args: Any) -> str:
        self._record(sql, args)
        return self.status


@contextmanager
def api_test_client(repository: InMemorySwiftRepository | None = None) -> Iterator[TestClient]:
    """Yield a TestClient wired to an in-memory store."""

    service = SwiftCodeService(repository if repository is not None else InMemorySwiftRepository())
    app = create_app(swift_service=service)
    with TestClient(app) as client:
        yield client
