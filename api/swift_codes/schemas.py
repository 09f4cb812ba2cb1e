"""
SWIFT code API schemas (request/response models).

Wire names are camelCase; Python attributes are snake_case.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CreateSwiftCodeRequest(BaseModel):
    # Wire keys only and no type coercion. Emptiness is a business rule
    # checked by the service, not here.
    model_config = ConfigDict(strict=True)

    address: str
    bank_name: str = Field(..., alias="bankName")
    country_iso2: str = Field(..., alias="countryISO2")
    country_name: str = Field(..., alias="countryName")
    is_headquarter: bool = Field(..., alias="isHeadquarter")
    swift_code: str = Field(..., alias="swiftCode")


class SwiftCodeBranch(_CamelModel):
    address: str
    bank_name: str = Field(..., alias="bankName")
    country_iso2: str = Field(..., alias="countryISO2")
    is_headquarter: bool = Field(..., alias="isHeadquarter")
    swift_code: str = Field(..., alias="swiftCode")


class SwiftCodeMinimalResponse(SwiftCodeBranch):
    """
    Same shape as a branch; used in the by-country listing.
    """


class SwiftCodeResponse(_CamelModel):
    address: str
    bank_name: str = Field(..., alias="bankName")
    country_iso2: str = Field(..., alias="countryISO2")
    country_name: str = Field(..., alias="countryName")
    is_headquarter: bool = Field(..., alias="isHeadquarter")
    swift_code: str = Field(..., alias="swiftCode")
    branches: list[SwiftCodeBranch] = Field(default_factory=list)


class SwiftCodesByCountryResponse(_CamelModel):
    country_iso2: str = Field(..., alias="countryISO2")
    country_name: str = Field(..., alias="countryName")
    swift_codes: list[SwiftCodeMinimalResponse] = Field(default_factory=list, alias="swiftCodes")


class MessageResponse(BaseModel):
    message: str
