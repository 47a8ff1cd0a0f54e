"""
API v1 Router.

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter
from backend.app.api.v1.endpoints import vehicles, trips

router = APIRouter()

router.include_router(vehicles.router)
router.include_router(trips.router)
