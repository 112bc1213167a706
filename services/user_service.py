"""
User service for account administration.

Handles the paginated user list, role changes and password resets.
Passwords live in Supabase auth, never in the users table.
"""

from typing import Optional
import structlog

from config import get_supabase_client, get_admin_client
from models.base import PaginationParams
from models.user import UserResponse, UserRole
from exceptions import (
    UserNotFoundError,
    DatabaseError,
    ExternalServiceError,
)

logger = structlog.get_logger(__name__)

USER_COLUMNS = "id, email, name, role, created_at, updated_at"


class UserService:
    """
    User business logic.

    Reads and role updates go through the users table; password updates go
    through the auth admin API with the service role client.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "users"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(self, page: int = 1, page_size: int = 10) -> tuple[list[UserResponse], int]:
        """
        Get a page of users, newest first.

        Args:
            page: Page number (1-indexed)
            page_size: Items per page

        Returns:
            Tuple of (users list, total count)
        """
        logger.info("getting_users", page=page, page_size=page_size)
        params = PaginationParams(page=page, page_size=page_size)

        try:
            result = (
                self.db.table(self.table)
                .select(USER_COLUMNS, count="exact")
                .order("created_at", desc=True)
                .range(params.offset, params.range_end)
                .execute()
            )

            users = [UserResponse(**row) for row in result.data]
            total = result.count or 0

            logger.info("users_retrieved", count=len(users), total=total)

            return users, total

        except Exception as e:
            logger.error("get_users_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def get_by_id(self, user_id: str) -> UserResponse:
        """
        Get a single user by ID.

        Raises:
            UserNotFoundError: If user doesn't exist
        """
        logger.debug("getting_user", user_id=user_id)

        try:
            result = (
                self.db.table(self.table)
                .select(USER_COLUMNS)
                .eq("id", user_id)
                .single()
                .execute()
            )

            if not result.data:
                raise UserNotFoundError(user_id)

            return UserResponse(**result.data)

        except UserNotFoundError:
            raise
        except Exception as e:
            logger.error("get_user_failed", user_id=user_id, error=str(e))
            # PostgREST reports a missing single row as an error
            if "0 rows" in str(e) or "no rows" in str(e).lower():
                raise UserNotFoundError(user_id)
            raise DatabaseError("select", str(e))

    # ===================
    # WRITE OPERATIONS
    # ===================

    def update_role(self, user_id: str, role: UserRole) -> UserResponse:
        """
        Change a user's role.

        Raises:
            UserNotFoundError: If user doesn't exist
            DatabaseError: If the update fails
        """
        existing = self.get_by_id(user_id)

        logger.info(
            "updating_user_role",
            user_id=user_id,
            old_role=existing.role.value,
            new_role=role.value,
        )

        try:
            result = (
                self.db.table(self.table)
                .update({"role": role.value})
                .eq("id", user_id)
                .execute()
            )
        except Exception as e:
            logger.error("update_user_role_failed", user_id=user_id, error=str(e))
            raise DatabaseError("update", str(e))

        if not result.data:
            raise UserNotFoundError(user_id)

        user = UserResponse(**result.data[0])
        logger.info("user_role_updated", user_id=user_id, role=user.role.value)
        return user

    def update_password(self, user_id: str, new_password: str) -> bool:
        """
        Set a new password through the auth admin API.

        Raises:
            UserNotFoundError: If user doesn't exist
            ExternalServiceError: Admin client missing or auth call failed
        """
        self.get_by_id(user_id)

        admin = get_admin_client()
        if admin is None:
            raise ExternalServiceError(
                service="supabase_auth",
                message="Password updates are not configured (missing service key)",
            )

        logger.info("updating_user_password", user_id=user_id)

        try:
            admin.auth.admin.update_user_by_id(user_id, {"password": new_password})
        except Exception as e:
            logger.error("update_user_password_failed", user_id=user_id, error=str(e))
            raise ExternalServiceError(
                service="supabase_auth",
                message="Failed to update password",
                details={"reason": str(e)},
            )

        logger.info("user_password_updated", user_id=user_id)
        return True


# Singleton instance
_user_service: Optional[UserService] = None


def get_user_service() -> UserService:
    """Get or create UserService instance."""
    global _user_service
    if _user_service is None:
        _user_service = UserService()
    return _user_service
