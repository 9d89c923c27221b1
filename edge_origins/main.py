# edge_origins/main.py
from __future__ import annotations

"""
# Edge Origins · Ops Application (FastAPI)

ASGI application for operators to inspect origin routing. The edge request
handler consumes `edge_origins.services.resolver` directly and does not run
this app.

## Design Goals
- Deterministic, testable **app factory** (`create_app`) with explicit lifespan.
- The origin catalog is built when its module is imported, so a misconfigured
  catalog stops the process before it serves anything.
- Centralized problem+json exception handling.

## Probes
- `/healthz`: liveness (process up).
- `/readyz`: readiness (catalog built).
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator
import logging
import os

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from edge_origins.api.v1.routers import router as api_v1_router
from edge_origins.core.config import settings
from edge_origins.core.exception_handlers import (
    global_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from edge_origins.core.logger import setup_logging
from edge_origins.middleware.request_id import RequestIDMiddleware
from edge_origins.services.catalog import get_catalog

logger = logging.getLogger("edge_origins")


# ─────────────────────────────────────────────────────────────────────────────
# 🔄 Lifespan: startup & shutdown
# ─────────────────────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Startup:
        - Mark the process-wide origin catalog ready (it was validated on
          import; a defect raises `CatalogConfigurationError` there).
    Shutdown:
        - Nothing to release; the catalog lives for the whole process.
    """
    catalog = get_catalog()
    app.state.catalog_ready = True
    logger.info("✅ %s starting up (%d origins, default POP %s)", settings.PROJECT_NAME, len(catalog), settings.DEFAULT_POP)
    try:
        yield
    finally:
        logger.info("🛑 %s shutting down", settings.PROJECT_NAME)


# ─────────────────────────────────────────────────────────────────────────────
# 🏗️ App factory
# ─────────────────────────────────────────────────────────────────────────────
def create_app() -> FastAPI:
    """
    Build and configure the FastAPI app instance.

    Returns:
        FastAPI: app with request-id middleware, exception handlers, the v1
        routing-inspection router and health/readiness endpoints.
    """
    setup_logging()

    docs_url = "/docs" if settings.ENABLE_DOCS else None
    openapi_url = "/openapi.json" if settings.ENABLE_DOCS else None

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        docs_url=docs_url,
        redoc_url=None,
        openapi_url=openapi_url,
        lifespan=lifespan,
    )
    app.state.catalog_ready = False

    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    # ── Meta endpoints ──────────────────────────────────────────────────────
    @app.get("/healthz", tags=["meta"])
    async def healthz() -> dict[str, bool]:
        """Liveness probe. No dependency checks."""
        return {"ok": True}

    @app.get("/readyz", tags=["meta"])
    async def readyz() -> dict[str, object]:
        """Readiness probe: the catalog has been built."""
        ready = bool(getattr(app.state, "catalog_ready", False))
        return {"ready": ready, "checks": {"catalog": ready}}

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        return {
            "name": settings.PROJECT_NAME,
            "docs": app.docs_url or "",
            "version": settings.VERSION,
        }

    return app


__all__ = ["create_app"]


# Local dev runner (prefer: `uvicorn edge_origins.main:create_app --factory`)
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "edge_origins.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("RELOAD", "0") == "1",
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
