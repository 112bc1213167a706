"""
Custom exception classes for the application.

Every error serializes to the same API response shape via to_dict().
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "USER_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ConflictError(AppError):
    """Conflict with current resource state (409)."""

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503 unless overridden)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None,
        code: Optional[str] = None,
        status_code: int = 503
    ):
        super().__init__(
            code=code or f"{service.upper()}_ERROR",
            message=message,
            status_code=status_code,
            details={"service": service, **(details or {})}
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# SPREADSHEET ERRORS
# ===================

class SpreadsheetLoadError(AppError):
    """No spreadsheet engine could be loaded (missing dependency)."""

    def __init__(self, details: Optional[dict] = None):
        super().__init__(
            code="SPREADSHEET_LOAD_ERROR",
            message="Failed to load the spreadsheet reader. Please contact an administrator.",
            status_code=500,
            details=details
        )


class SpreadsheetFormatError(ValidationError):
    """Sheet has no header row or no data rows."""

    def __init__(self, row_count: int):
        super().__init__(
            code="SPREADSHEET_FORMAT_ERROR",
            message="Excel file must have at least a header row and one data row",
            details={"row_count": row_count}
        )


class SpreadsheetDecodeError(ValidationError):
    """File could not be read as a spreadsheet."""

    def __init__(self, details: Optional[dict] = None):
        super().__init__(
            code="SPREADSHEET_DECODE_ERROR",
            message="Failed to read Excel file. Please check the file format.",
            details=details
        )


# ===================
# AUTOFILL IMPORT ERRORS
# ===================

class AutofillSessionNotFoundError(NotFoundError):
    """Import session expired or never existed."""

    def __init__(self, session_id: str):
        super().__init__(
            resource="Import session",
            identifier=session_id,
            code="AUTOFILL_SESSION_NOT_FOUND"
        )


class AutofillRowNotFoundError(NotFoundError):
    """Row index outside the working set."""

    def __init__(self, row_index: int):
        super().__init__(
            resource="Import row",
            identifier=str(row_index),
            code="AUTOFILL_ROW_NOT_FOUND"
        )


class AutofillInvalidFieldError(ValidationError):
    """Edit targets a field the record does not have."""

    def __init__(self, field: str):
        super().__init__(
            code="AUTOFILL_INVALID_FIELD",
            message=f"Unknown field: {field}",
            details={"field": field}
        )


class AutofillNoDataError(ValidationError):
    """Submit called with an empty working set."""

    def __init__(self):
        super().__init__(
            code="AUTOFILL_NO_DATA",
            message="Please upload an Excel file with data to import."
        )


class AutofillImportInProgressError(ConflictError):
    """A submission for this session is already running."""

    def __init__(self, session_id: str):
        super().__init__(
            code="AUTOFILL_IMPORT_IN_PROGRESS",
            message="An import for this upload is already in progress",
            details={"session_id": session_id}
        )


class PodImportError(ExternalServiceError):
    """Ingestion endpoint rejected or never received the batch."""

    def __init__(self, details: Optional[dict] = None):
        super().__init__(
            service="autofill_ingest",
            code="AUTOFILL_IMPORT_ERROR",
            message="Failed to import autofill pods. Please try again.",
            status_code=502,
            details=details
        )


# ===================
# USER ERRORS
# ===================

class UserNotFoundError(NotFoundError):
    """User not found."""

    def __init__(self, user_id: str):
        super().__init__(
            resource="User",
            identifier=user_id,
            code="USER_NOT_FOUND"
        )
