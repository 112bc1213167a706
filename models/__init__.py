"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    TimestampMixin,
    PaginationParams,
    PaginatedResponse
)
from models.autofill import (
    AutofillPodRecord,
    AutofillFieldInfo,
    AutofillColumnMappingResponse,
    AutofillPreviewResponse,
    AutofillCellEdit,
    AutofillRowResponse,
    AutofillSubmitResponse,
)
from models.pod import (
    PodSummary,
    ActivePodFilters,
    ActivePodsResponse,
)
from models.user import (
    UserRole,
    UserResponse,
    UserListResponse,
    UserRoleUpdate,
    UserPasswordUpdate,
    UserPasswordResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "TimestampMixin",
    "PaginationParams",
    "PaginatedResponse",

    # Autofill import
    "AutofillPodRecord",
    "AutofillFieldInfo",
    "AutofillColumnMappingResponse",
    "AutofillPreviewResponse",
    "AutofillCellEdit",
    "AutofillRowResponse",
    "AutofillSubmitResponse",

    # PODs
    "PodSummary",
    "ActivePodFilters",
    "ActivePodsResponse",

    # Users
    "UserRole",
    "UserResponse",
    "UserListResponse",
    "UserRoleUpdate",
    "UserPasswordUpdate",
    "UserPasswordResponse",
]
