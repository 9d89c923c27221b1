"""Aggregated v1 router.

    from edge_origins.api.v1.routers import router as api_v1_router
"""

from fastapi import APIRouter

from edge_origins.api.v1.routers.ops import origins

router = APIRouter()
router.include_router(origins.router)

__all__ = ["router"]
