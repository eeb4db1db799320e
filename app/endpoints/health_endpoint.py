# app/endpoints/health_endpoint.py
import time
from datetime import datetime, timezone

from fastapi import APIRouter

from app.core.config import settings
from app.db import mongodb
from app.utiles.logger import get_logger
from app.utiles.response import send_response

router = APIRouter(tags=["Health"])

# Logger instance for this module
logger = get_logger(__name__)

_STARTED_AT = time.monotonic()


@router.get("/health")
async def health():
    """Liveness check. No auth, no database round-trip."""
    return send_response(200, "API is healthy", {"status": "UP"})


@router.get("/health/status")
async def health_status():
    """
    Endpoint: Detailed status, including a MongoDB ping.
    A failed ping still answers 200 with database status DOWN.
    """
    try:
        await mongodb.ping()
        database = "UP"
    except Exception as e:
        logger.error(f"MongoDB ping failed: {e}")
        database = "DOWN"

    return send_response(200, "API status retrieved successfully", {
        "status": "UP" if database == "UP" else "DEGRADED",
        "version": settings.APP_VERSION,
        "environment": settings.APP_ENV,
        "database": database,
        "uptimeSeconds": round(time.monotonic() - _STARTED_AT, 3),
        "timestamp": datetime.now(timezone.utc),
    })
