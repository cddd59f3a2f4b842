"""
Health check endpoints.
"""

import logging
from typing import Dict, Any
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from sqlalchemy import text
from datetime import datetime, timezone

from app.core.database import get_db

router = APIRouter(tags=["Health"])
logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> Dict[str, str]:
    """
    Basic health check endpoint.

    Returns 200 OK if the service is running.
    Use this for simple uptime monitoring and load balancer health checks.
    """
    return {
        "status": "healthy",
        "timestamp": _now()
    }


@router.get("/health/detailed", status_code=status.HTTP_200_OK)
def detailed_health_check(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """
    Health check including database connectivity.

    Always returns 200; inspect `status` and `checks.database`.
    """
    health_status = {
        "status": "healthy",
        "timestamp": _now(),
        "checks": {}
    }

    try:
        db.execute(text("SELECT 1"))
        health_status["checks"]["database"] = {
            "status": "healthy",
            "message": "Database connection successful"
        }
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        health_status["status"] = "unhealthy"
        health_status["checks"]["database"] = {
            "status": "unhealthy",
            "message": f"Database error: {str(e)}"
        }

    return health_status
