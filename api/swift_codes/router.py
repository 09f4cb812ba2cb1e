"""
SWIFT code API endpoints.

The country route is declared before `/swift-codes/{swift_code}` so it is
matched first.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import ValidationError

from . import errors, schemas
from .dependencies import get_swift_service
from .service import SwiftCodeService

logger = logging.getLogger(__name__)

router = APIRouter()

INTERNAL_ERROR_DETAIL = "Internal server error"

_STATUS_BY_ERROR: dict[type[errors.SwiftCodeError], int] = {
    errors.NotFoundError: status.HTTP_404_NOT_FOUND,
    errors.MalformedRequestError: status.HTTP_400_BAD_REQUEST,
    errors.InvalidFormatError: status.HTTP_400_BAD_REQUEST,
    errors.MissingFieldError: status.HTTP_400_BAD_REQUEST,
    errors.InconsistentFlagError: status.HTTP_400_BAD_REQUEST,
    errors.DuplicateKeyError: status.HTTP_409_CONFLICT,
}


def _to_http(exc: errors.SwiftCodeError) -> HTTPException:
    status_code = _STATUS_BY_ERROR.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        # Driver text stays in the log.
        logger.error("SWIFT code request failed: %s", exc, exc_info=exc)
        return HTTPException(status_code=status_code, detail=INTERNAL_ERROR_DETAIL)
    return HTTPException(status_code=status_code, detail=str(exc))


async def _parse_create_request(request: Request) -> schemas.CreateSwiftCodeRequest:
    body = await request.body()
    try:
        return schemas.CreateSwiftCodeRequest.model_validate_json(body)
    except ValidationError as exc:
        raise errors.MalformedRequestError("Invalid request data") from exc


@router.get(
    "/swift-codes/country/{country_iso2}",
    response_model=schemas.SwiftCodesByCountryResponse,
)
async def get_swift_codes_by_country(
    country_iso2: str,
    service: SwiftCodeService = Depends(get_swift_service),
) -> schemas.SwiftCodesByCountryResponse:
    try:
        result = await service.get_by_country(country_iso2)
    except errors.SwiftCodeError as exc:
        raise _to_http(exc) from exc
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No SWIFT codes found for country")
    return result


@router.get("/swift-codes/{swift_code}", response_model=schemas.SwiftCodeResponse)
async def get_swift_code(
    swift_code: str,
    service: SwiftCodeService = Depends(get_swift_service),
) -> schemas.SwiftCodeResponse:
    try:
        result = await service.get_details(swift_code)
    except errors.SwiftCodeError as exc:
        raise _to_http(exc) from exc
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="SWIFT code not found")
    return result


@router.post(
    "/swift-codes",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.MessageResponse,
)
async def create_swift_code(
    request: Request,
    service: SwiftCodeService = Depends(get_swift_service),
) -> schemas.MessageResponse:
    try:
        payload = await _parse_create_request(request)
        await service.create(payload)
    except errors.SwiftCodeError as exc:
        raise _to_http(exc) from exc
    return schemas.MessageResponse(message="SWIFT code created successfully")


@router.delete("/swift-codes/{swift_code}", response_model=schemas.MessageResponse)
async def delete_swift_code(
    swift_code: str,
    service: SwiftCodeService = Depends(get_swift_service),
) -> schemas.MessageResponse:
    try:
        await service.delete(swift_code)
    except errors.SwiftCodeError as exc:
        raise _to_http(exc) from exc
    return schemas.MessageResponse(message="SWIFT code deleted successfully")
