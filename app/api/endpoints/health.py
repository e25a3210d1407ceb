"""
Health check endpoints.

Reports database connectivity and whether the upload directory is usable.
"""

import logging
from typing import Dict, Any
from fastapi import APIRouter, Depends, Request, status
from datetime import datetime, timezone

from app.core.storage import LocalStorage, get_storage

router = APIRouter(tags=["Health"])
logger = logging.getLogger(__name__)


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> Dict[str, str]:
    """
    Basic health check endpoint.

    Returns 200 OK if the service is running.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/health/detailed", status_code=status.HTTP_200_OK)
def detailed_health_check(
    request: Request,
    storage: LocalStorage = Depends(get_storage)
) -> Dict[str, Any]:
    """
    Detailed health check with dependency status.

    Checks:
    - Database connectivity
    - Upload directory exists and is writable
    """
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {}
    }

    try:
        request.app.state.database.ping()
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

    if storage.is_writable():
        health_status["checks"]["storage"] = {
            "status": "healthy",
            "message": f"Upload directory {storage.base_dir} is writable"
        }
    else:
        logger.error(f"Storage health check failed: {storage.base_dir} not writable")
        health_status["status"] = "unhealthy"
        health_status["checks"]["storage"] = {
            "status": "unhealthy",
            "message": f"Upload directory {storage.base_dir} is missing or not writable"
        }

    return health_status
