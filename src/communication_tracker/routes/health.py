"""Liveness endpoint reporting whether MongoDB is reachable."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from communication_tracker.database import db_manager

router = APIRouter(tags=["System"])


@router.get("/health")
async def health():
    """Return 200 when MongoDB answers a ping, 503 otherwise (including while still connecting)."""
    if await db_manager.health_check():
        return {"status": "healthy", "database": "connected"}
    return JSONResponse(status_code=503, content={"status": "unhealthy", "database": "disconnected"})
