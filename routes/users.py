"""
User management API routes.
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
import structlog

from models.user import (
    UserResponse,
    UserListResponse,
    UserRoleUpdate,
    UserPasswordUpdate,
    UserPasswordResponse,
)
from services.user_service import get_user_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])


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
                "message": "An unexpected error occurred"
            }
        }
    )


@router.get("", response_model=UserListResponse)
async def list_users(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(10, ge=1, le=100, description="Items per page"),
):
    """List users, newest first."""
    try:
        users, total = get_user_service().get_all(page=page, page_size=page_size)
        return UserListResponse.create(
            data=users,
            total=total,
            page=page,
            page_size=page_size,
        )
    except Exception as e:
        return _handle_error(e)


@router.put("/{user_id}/role", response_model=UserResponse)
async def update_user_role(user_id: str, data: UserRoleUpdate):
    """
    Change a user's role.

    Raises:
        404: User not found
        422: Invalid role
    """
    try:
        return get_user_service().update_role(user_id, data.role)
    except Exception as e:
        return _handle_error(e)


@router.post("/{user_id}/password", response_model=UserPasswordResponse)
async def update_user_password(user_id: str, data: UserPasswordUpdate):
    """
    Set a new password for a user.

    Raises:
        404: User not found
        503: Auth admin API unavailable
    """
    try:
        get_user_service().update_password(user_id, data.new_password)
        return UserPasswordResponse(success=True, message="Password updated successfully.")
    except Exception as e:
        return _handle_error(e)
