"""
Active POD API routes.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import structlog

from models.pod import ActivePodsResponse
from services.pod_service import get_pod_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/active-pods", tags=["PODs"])


def _handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(status_code=e.status_code, content=e.to_dict())
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "Failed to fetch active PODs"
            }
        }
    )


@router.get("", response_model=ActivePodsResponse)
async def list_active_pods():
    """
    Get all active PODs with filter options.

    Filter options cover the full active set, not the current selection.
    """
    try:
        return get_pod_service().get_active_pods()
    except Exception as e:
        return _handle_error(e)
