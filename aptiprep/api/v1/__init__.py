"""
API v1 Router

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from aptiprep.api.v1.endpoints import admin, attempts, content, progress

router = APIRouter()

# Include progress routes
router.include_router(progress.router)

# Include content catalogue routes
router.include_router(content.router)

# Include mock test attempt routes
router.include_router(attempts.router)

# Include admin routes
router.include_router(admin.router)
