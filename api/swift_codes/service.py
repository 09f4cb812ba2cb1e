"""
SWIFT code business rules.

Scope:
- headquarters/branch relationship, derived from the 8-character prefix
- country code and name normalization (upper case)
- create/delete validation
"""

from __future__ import annotations

import logging
from typing import Protocol

from . import schemas
from .errors import (
    DuplicateKeyError,
    InconsistentFlagError,
    InvalidFormatError,
    MissingFieldError,
    NotFoundError,
    StorageError,
)
from .repository import SwiftRecord

PREFIX_LENGTH = 8
HQ_CODE_LENGTH = 11
HQ_SUFFIX = "XXX"

logger = logging.getLogger(__name__)


class SwiftCodeStore(Protocol):
    async def find_by_code(self, swift_code: str) -> SwiftRecord | None: ...

    async def find_branches(self, hq_prefix: str) -> list[SwiftRecord]: ...

    async def find_by_country(self, country_iso2: str) -> list[SwiftRecord]: ...

    async def insert(self, record: SwiftRecord) -> None: ...

    async def delete_by_code(self, swift_code: str) -> None: ...


def is_headquarter_code(swift_code: str) -> bool:
    return len(swift_code) == HQ_CODE_LENGTH and swift_code[PREFIX_LENGTH:] == HQ_SUFFIX


def _check_code_length(swift_code: str) -> None:
    if len(swift_code) < PREFIX_LENGTH:
        raise InvalidFormatError(f"invalid SWIFT code: must be at least {PREFIX_LENGTH} characters")


class SwiftCodeService:
    def __init__(self, repository: SwiftCodeStore) -> None:
        self._repository = repository

    async def get_details(self, swift_code: str) -> schemas.SwiftCodeResponse | None:
        record = await self._repository.find_by_code(swift_code)
        if record is None:
            return None

        response = schemas.SwiftCodeResponse(
            address=record.address,
            bank_name=record.bank_name,
            country_iso2=record.country_iso2.upper(),
            country_name=record.country_name.upper(),
            is_headquarter=record.is_headquarter,
            swift_code=record.swift_code,
            branches=[],
        )
        if not record.is_headquarter:
            return response

        branches = await self._repository.find_branches(record.swift_code[:PREFIX_LENGTH])
        response.branches = [
            schemas.SwiftCodeBranch(
                address=branch.address,
                bank_name=branch.bank_name,
                country_iso2=branch.country_iso2.upper(),
                is_headquarter=branch.is_headquarter,
                swift_code=branch.swift_code,
            )
            # The store already filters on the flag; HQ rows are dropped again here.
            for branch in branches
            if not branch.is_headquarter
        ]
        return response

    async def get_by_country(self, country_iso2: str) -> schemas.SwiftCodesByCountryResponse | None:
        # Stored values are upper case; the query value is passed through as given.
        records = await self._repository.find_by_country(country_iso2)
        if not records:
            return None

        return schemas.SwiftCodesByCountryResponse(
            country_iso2=country_iso2.upper(),
            country_name=records[0].country_name.upper(),
            swift_codes=[
                schemas.SwiftCodeMinimalResponse(
                    address=record.address,
                    bank_name=record.bank_name,
                    country_iso2=record.country_iso2,
                    is_headquarter=record.is_headquarter,
                    swift_code=record.swift_code,
                )
                for record in records
            ],
        )

    async def create(self, request: schemas.CreateSwiftCodeRequest) -> None:
        try:
            _check_code_length(request.swift_code)
            if not request.country_iso2 or not request.country_name:
                raise MissingFieldError("countryISO2 and countryName cannot be empty")
            if not request.bank_name or not request.address:
                raise MissingFieldError("bankName and address cannot be empty")
            if is_headquarter_code(request.swift_code) != request.is_headquarter:
                raise InconsistentFlagError("SWIFT code does not match the provided isHeadquarter value")
        except (InvalidFormatError, MissingFieldError, InconsistentFlagError) as exc:
            logger.warning("Rejected SWIFT code %r: %s", request.swift_code, exc)
            raise

        record = SwiftRecord(
            swift_code=request.swift_code,
            bank_name=request.bank_name,
            address=request.address,
            country_iso2=request.country_iso2.upper(),
            country_name=request.country_name.upper(),
            is_headquarter=request.is_headquarter,
        )
        try:
            await self._repository.insert(record)
        except DuplicateKeyError as exc:
            raise DuplicateKeyError(f"failed to create SWIFT code: {exc}") from exc
        except StorageError as exc:
            raise StorageError(f"failed to create SWIFT code: {exc}") from exc

        logger.info("Created SWIFT code %s", record.swift_code)

    async def delete(self, swift_code: str) -> None:
        _check_code_length(swift_code)
        try:
            await self._repository.delete_by_code(swift_code)
        except NotFoundError:
            raise
        except StorageError as exc:
            raise StorageError(f"failed to delete SWIFT code: {exc}") from exc

        logger.info("Deleted SWIFT code %s", swift_code)
