"""
SWIFT code domain errors.

Repository and service raise these; only the router turns them into HTTP
responses.
"""

from __future__ import annotations


class SwiftCodeError(Exception):
    """Base class for every SWIFT code failure."""


class NotFoundError(SwiftCodeError):
    pass


class InvalidFormatError(SwiftCodeError):
    pass


class MissingFieldError(SwiftCodeError):
    pass


class InconsistentFlagError(SwiftCodeError):
    """isHeadquarter does not match the XXX branch suffix rule."""


class DuplicateKeyError(SwiftCodeError):
    pass


class StorageError(SwiftCodeError):
    pass


class MalformedRequestError(SwiftCodeError):
    pass
