"""
User account schemas.
"""

from pydantic import Field
from typing import Optional
from enum import Enum

from models.base import BaseSchema, TimestampMixin, PaginatedResponse


class UserRole(str, Enum):
    """Access roles, lowest to highest."""
    REGULAR = "REGULAR"
    PRIORITY = "PRIORITY"
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"


class UserResponse(BaseSchema, TimestampMixin):
    """User with all public fields."""

    id: str = Field(..., description="User UUID")
    email: str = Field(..., description="Login email")
    name: Optional[str] = Field(None, description="Display name")
    role: UserRole = Field(..., description="Access role")


class UserListResponse(PaginatedResponse):
    """Paginated list of users."""

    data: list[UserResponse]


class UserRoleUpdate(BaseSchema):
    """Change a user's role."""

    role: UserRole = Field(..., description="New role")


class UserPasswordUpdate(BaseSchema):
    """Set a new password for a user."""

    new_password: str = Field(..., min_length=6, max_length=128, description="New password")


class UserPasswordResponse(BaseSchema):
    """Result of a password change."""

    success: bool
    message: str
