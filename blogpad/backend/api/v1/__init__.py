"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from blogpad.backend.api.v1.endpoints import entries

router = APIRouter()

# Entries endpoints
router.include_router(entries.router, prefix="/entries", tags=["entries"])
