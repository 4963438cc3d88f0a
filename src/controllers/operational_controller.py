"""
Operational/Infrastructure endpoints
These endpoints are used by monitoring systems, load balancers, and DevOps tools
"""

import time
from datetime import datetime, timezone

from fastapi import Request
from fastapi.responses import JSONResponse

from src.config import config
from src.core.logger import logger
from src.db import mongodb

start_time = time.time()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def health(request: Request):
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": config.service_name,
        "timestamp": _now(),
        "version": config.service_version,
    }


async def readiness(request: Request):
    """Readiness probe - ready only while the database answers"""
    if await mongodb.ping():
        return {
            "status": "ready",
            "service": config.service_name,
            "timestamp": _now(),
            "checks": {"database": "connected"},
        }

    logger.error("Readiness check failed", metadata={"event": "readiness", "database": "disconnected"})
    return JSONResponse(
        status_code=503,
        content={
            "status": "not ready",
            "service": config.service_name,
            "timestamp": _now(),
            "checks": {"database": "disconnected"},
        },
    )


def liveness(request: Request):
    """Liveness probe - check if the app is running"""
    return {
        "status": "alive",
        "service": config.service_name,
        "timestamp": _now(),
        "uptime": time.time() - start_time,
    }
