"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ConflictError,
    ExternalServiceError,
    DatabaseError,

    # Spreadsheet decoding
    SpreadsheetLoadError,
    SpreadsheetFormatError,
    SpreadsheetDecodeError,

    # Autofill import
    AutofillSessionNotFoundError,
    AutofillRowNotFoundError,
    AutofillInvalidFieldError,
    AutofillNoDataError,
    AutofillImportInProgressError,
    PodImportError,

    # Users
    UserNotFoundError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "ExternalServiceError",
    "DatabaseError",

    # Spreadsheet decoding
    "SpreadsheetLoadError",
    "SpreadsheetFormatError",
    "SpreadsheetDecodeError",

    # Autofill import
    "AutofillSessionNotFoundError",
    "AutofillRowNotFoundError",
    "AutofillInvalidFieldError",
    "AutofillNoDataError",
    "AutofillImportInProgressError",
    "PodImportError",

    # Users
    "UserNotFoundError",
]
