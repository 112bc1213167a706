"""
Autofill POD import routes.

Upload an Excel sheet of POD metadata, review and edit the parsed rows,
then submit them to the ingestion endpoint in one batch.

Follows the preview-then-confirm pattern: the upload returns a session_id
that every later call refers to.
"""

from fastapi import APIRouter, UploadFile, File
from fastapi.responses import JSONResponse
import structlog

from config.autofill_mapping import AUTOFILL_COLUMN_MAPPINGS
from models.autofill import (
    AutofillColumnMappingResponse,
    AutofillPreviewResponse,
    AutofillCellEdit,
    AutofillRowResponse,
    AutofillSubmitResponse,
)
from parsers.spreadsheet_decoder import SUPPORTED_EXTENSIONS
from services.autofill_import_service import get_autofill_import_service
from exceptions import AppError, ValidationError

router = APIRouter(prefix="/api/autofill", tags=["Autofill Import"])
logger = structlog.get_logger(__name__)


def _handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
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


@router.get("/mappings", response_model=list[AutofillColumnMappingResponse])
async def list_column_mappings():
    """Spreadsheet columns the import understands, in table order."""
    return [
        AutofillColumnMappingResponse(
            excel_column=m.excel_column,
            field_name=m.field_name,
            required=m.required,
        )
        for m in AUTOFILL_COLUMN_MAPPINGS
    ]


@router.post("/upload", response_model=AutofillPreviewResponse)
def upload_autofill_excel(file: UploadFile = File(...)):
    """
    Parse an autofill Excel file into a new import session.

    Only the first sheet is read. Unrecognized columns are ignored and rows
    without a POD are skipped. Runs in the threadpool.

    Raises:
        422: Not an Excel file, unreadable, or fewer than two rows
        500: Spreadsheet reader unavailable
    """
    try:
        filename = file.filename or ""
        if not filename.lower().endswith(SUPPORTED_EXTENSIONS):
            raise ValidationError(
                code="INVALID_FILE_TYPE",
                message="File must be an Excel file (.xlsx, .xlsm, .xls)",
                details={"filename": filename}
            )

        content = file.file.read()

        service = get_autofill_import_service()
        session = service.create_session(content, filename=filename)

        logger.info(
            "autofill_upload_parsed",
            session_id=session.id,
            filename=filename,
            size_bytes=len(content),
            row_count=len(session),
        )

        return service.to_preview(session)

    except Exception as e:
        return _handle_error(e)


@router.get("/{session_id}", response_model=AutofillPreviewResponse)
async def get_autofill_session(session_id: str):
    """
    Get the current rows of an import session.

    Raises:
        404: Session expired or not found
    """
    try:
        service = get_autofill_import_service()
        return service.to_preview(service.get_session(session_id))
    except Exception as e:
        return _handle_error(e)


@router.patch("/{session_id}/rows/{row_index}", response_model=AutofillRowResponse)
async def edit_autofill_cell(session_id: str, row_index: int, data: AutofillCellEdit):
    """
    Edit one cell. The value is coerced like the original upload.

    Editing Router 1 or Router 2 recalculates Router Type.

    Raises:
        404: Session or row not found
        422: Unknown field
    """
    try:
        service = get_autofill_import_service()
        record = service.edit_cell(session_id, row_index, data.field, data.value)
        return AutofillRowResponse(row_index=row_index, row=record)
    except Exception as e:
        return _handle_error(e)


@router.delete("/{session_id}/rows/{row_index}", response_model=AutofillPreviewResponse)
async def remove_autofill_row(session_id: str, row_index: int):
    """
    Remove a row. Later rows move up one index.

    Raises:
        404: Session or row not found
    """
    try:
        service = get_autofill_import_service()
        session = service.remove_row(session_id, row_index)
        return service.to_preview(session)
    except Exception as e:
        return _handle_error(e)


@router.post("/{session_id}/submit", response_model=AutofillSubmitResponse)
def submit_autofill_session(session_id: str):
    """
    Import every row of the session.

    On success the session is closed. On failure it is kept for retry.
    Runs in the threadpool; the ingestion call blocks.

    Raises:
        404: Session expired or not found
        409: Import already in progress
        422: Nothing to import
        502: Ingestion endpoint failed
    """
    try:
        service = get_autofill_import_service()
        return service.submit(session_id)
    except Exception as e:
        return _handle_error(e)


@router.delete("/{session_id}", status_code=204)
async def discard_autofill_session(session_id: str):
    """Discard an import session without importing."""
    try:
        get_autofill_import_service().discard(session_id)
        return None  # 204 No Content
    except Exception as e:
        return _handle_error(e)
