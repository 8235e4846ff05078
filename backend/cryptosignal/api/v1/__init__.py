"""
API v1 Router

All API endpoints for clients.
"""

from fastapi import APIRouter

from cryptosignal.api.v1.endpoints import signals

router = APIRouter()

# Include all endpoint routers
router.include_router(signals.router, prefix="/signals", tags=["Trading Signals"])
