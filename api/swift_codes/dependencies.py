"""
FastAPI dependencies for SWIFT code routes.
"""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from .service import SwiftCodeService


def get_swift_service(request: Request) -> SwiftCodeService:
    service = getattr(request.app.state, "swift_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="SWIFT code service is not initialized.",
        )
    return service
