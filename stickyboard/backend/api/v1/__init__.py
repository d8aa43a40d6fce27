"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from stickyboard.backend.api.v1.endpoints import stickies

router = APIRouter()

router.include_router(stickies.router, prefix="/stickies", tags=["stickies"])
