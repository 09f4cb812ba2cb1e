import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from core import db
from core.logging import configure_logging
from swift_codes import router as swift_codes_router
from swift_codes.repository import SwiftCodeRepository
from swift_codes.service import SwiftCodeService

API_PREFIX = "/api/v1"

logger = logging.getLogger(__name__)


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in {"1", "true", "yes", "on"}


def create_app(swift_service: SwiftCodeService | None = None) -> FastAPI:
    """
    Build the API. Pass `swift_service` to skip the database wiring (tests).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging()
        if swift_service is not None:
            app.state.swift_service = swift_service
            yield
            return

        # One pool, repository and service per process.
        pool = await db.init_pool()
        try:
            repository = SwiftCodeRepository(pool)
            if _env_flag("DB_CREATE_SCHEMA"):
                await repository.create_schema()
            app.state.swift_service = SwiftCodeService(repository)
            logger.info("SWIFT code API started")
            yield
        finally:
            await db.close_pool()

    app = FastAPI(title="SWIFT codes API", lifespan=lifespan)
    app.include_router(swift_codes_router, tags=["swift-codes"])
    app.include_router(swift_codes_router, prefix=API_PREFIX, tags=["swift-codes"])

    @app.get("/health")
    @app.get(f"{API_PREFIX}/health")
    def health() -> dict:
        return {"status": "UP"}

    return app


app = create_app()
