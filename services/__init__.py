"""
Business logic services.

Each service handles one domain area.
"""

from services.autofill_import_service import (
    AutofillImportService,
    AutofillImportSession,
    get_autofill_import_service,
)
from services.pod_service import PodService, get_pod_service
from services.user_service import UserService, get_user_service

__all__ = [
    "AutofillImportService",
    "AutofillImportSession",
    "get_autofill_import_service",
    "PodService",
    "get_pod_service",
    "UserService",
    "get_user_service",
]
