"""
Autofill POD import service.

Flow:
    upload -> parse into an import session (cached working set)
           -> edit cells / remove rows
           -> submit the whole set to the ingestion endpoint

The working set is authoritative until a successful submit clears it.
A failed submit leaves it untouched so the user can fix rows and retry.
"""

from datetime import datetime
from io import BytesIO
from typing import Any, Optional, Union
import threading
import uuid
import structlog

from config import settings
from config.autofill_mapping import ROUTER_FIELDS, display_name_for_field
from models.autofill import (
    AutofillPodRecord,
    AutofillFieldInfo,
    AutofillPreviewResponse,
    AutofillSubmitResponse,
)
from parsers.autofill_parser import (
    parse_autofill_spreadsheet,
    coerce_field_value,
    determine_router_type,
)
from integrations.ingestion_client import submit_autofill_pods
from services import session_cache_service
from exceptions import (
    AutofillSessionNotFoundError,
    AutofillRowNotFoundError,
    AutofillInvalidFieldError,
    AutofillNoDataError,
    AutofillImportInProgressError,
    PodImportError,
)

logger = structlog.get_logger(__name__)


class AutofillImportSession:
    """
    Working set for one upload.

    Rows have no identity beyond their position; removing a row shifts
    every later index down by one.
    """

    def __init__(
        self,
        records: list[AutofillPodRecord],
        fields: list[str],
        filename: Optional[str] = None,
        dropped_rows: int = 0,
        warnings: Optional[list[str]] = None,
        session_id: Optional[str] = None,
    ):
        self.id = session_id or str(uuid.uuid4())
        self.filename = filename
        self.records = list(records)
        self.fields = list(fields)
        self.dropped_rows = dropped_rows
        self.warnings = list(warnings or [])
        self.is_processing = False
        self.created_at = datetime.now()
        # Guards is_processing; submits run in worker threads
        self.lock = threading.Lock()

    def __len__(self) -> int:
        return len(self.records)

    def get_row(self, row_index: int) -> AutofillPodRecord:
        if row_index < 0 or row_index >= len(self.records):
            raise AutofillRowNotFoundError(row_index)
        return self.records[row_index]

    def edit_cell(self, row_index: int, field_name: str, raw_value: Any) -> AutofillPodRecord:
        """
        Replace one field of one row, coercing the raw text like the parser.

        Editing router1/router2 re-derives router_type and overwrites any
        previous value, manual or derived, unless a router name is missing.

        Raises:
            AutofillRowNotFoundError: Index out of range
            AutofillInvalidFieldError: Field is not part of a record
        """
        record = self.get_row(row_index)
        if field_name not in AutofillPodRecord.model_fields:
            raise AutofillInvalidFieldError(field_name)

        setattr(record, field_name, coerce_field_value(field_name, raw_value))

        if field_name in ROUTER_FIELDS:
            derived = determine_router_type(record.router1, record.router2)
            if derived is not None:
                record.router_type = derived

        return record

    def remove_row(self, row_index: int) -> AutofillPodRecord:
        """Delete a row and return it."""
        self.get_row(row_index)
        return self.records.pop(row_index)

    def clear(self) -> None:
        """Empty the working set."""
        self.records = []
        self.fields = []


class AutofillImportService:
    """
    Autofill import business logic.

    Owns the session cache lookups and the submit lifecycle.
    """

    def __init__(self):
        self.ttl_minutes = settings.import_session_ttl_minutes

    # ===================
    # SESSION LIFECYCLE
    # ===================

    def create_session(
        self,
        content: Union[bytes, BytesIO],
        filename: Optional[str] = None,
    ) -> AutofillImportSession:
        """
        Parse an upload into a new cached import session.

        Raises:
            SpreadsheetLoadError, SpreadsheetFormatError, SpreadsheetDecodeError
        """
        result = parse_autofill_spreadsheet(content, filename=filename)

        session = AutofillImportSession(
            records=result.records,
            fields=result.fields,
            filename=filename,
            dropped_rows=result.dropped_rows,
            warnings=result.warnings,
        )
        session_cache_service.store_session(session.id, session, self.ttl_minutes)

        logger.info(
            "autofill_session_created",
            session_id=session.id,
            filename=filename,
            row_count=len(session),
            dropped=result.dropped_rows,
        )

        return session

    def get_session(self, session_id: str) -> AutofillImportSession:
        """
        Raises:
            AutofillSessionNotFoundError: Unknown or expired session
        """
        session = session_cache_service.retrieve_session(session_id, self.ttl_minutes)
        if session is None:
            raise AutofillSessionNotFoundError(session_id)
        return session

    def discard(self, session_id: str) -> None:
        """Drop a session without importing (dialog closed)."""
        session_cache_service.delete_session(session_id)
        logger.info("autofill_session_discarded", session_id=session_id)

    # ===================
    # EDITS
    # ===================

    def edit_cell(
        self,
        session_id: str,
        row_index: int,
        field_name: str,
        value: Any,
    ) -> AutofillPodRecord:
        session = self.get_session(session_id)
        record = session.edit_cell(row_index, field_name, value)

        logger.debug(
            "autofill_cell_edited",
            session_id=session_id,
            row_index=row_index,
            field=field_name,
        )

        return record

    def remove_row(self, session_id: str, row_index: int) -> AutofillImportSession:
        session = self.get_session(session_id)
        removed = session.remove_row(row_index)

        logger.info(
            "autofill_row_removed",
            session_id=session_id,
            row_index=row_index,
            pod=removed.pod,
            remaining=len(session),
        )

        return session

    # ===================
    # SUBMIT
    # ===================

    def submit(self, session_id: str) -> AutofillSubmitResponse:
        """Submit a cached session. See submit_session()."""
        return self.submit_session(self.get_session(session_id))

    def submit_session(self, session: AutofillImportSession) -> AutofillSubmitResponse:
        """
        Send the working set to the ingestion endpoint as one batch.

        Returns:
            AutofillSubmitResponse with the imported count

        Raises:
            AutofillNoDataError: Working set is empty (no network call made)
            AutofillImportInProgressError: A submit is already running
            PodImportError: Endpoint failed; working set is kept
        """
        if not session.records:
            logger.warning("autofill_submit_empty", session_id=session.id)
            raise AutofillNoDataError()

        with session.lock:
            if session.is_processing:
                raise AutofillImportInProgressError(session.id)
            session.is_processing = True

        try:
            count = submit_autofill_pods(session.records)
        except PodImportError:
            logger.warning(
                "autofill_submit_failed",
                session_id=session.id,
                row_count=len(session),
            )
            raise
        finally:
            session.is_processing = False

        session.clear()
        session_cache_service.delete_session(session.id)

        logger.info("autofill_submit_complete", session_id=session.id, imported=count)

        return AutofillSubmitResponse(
            success=True,
            imported_count=count,
            message=f"Successfully imported {count} autofill pods.",
        )

    # ===================
    # RESPONSES
    # ===================

    def to_preview(self, session: AutofillImportSession) -> AutofillPreviewResponse:
        """Build the preview payload for a session."""
        return AutofillPreviewResponse(
            session_id=session.id,
            filename=session.filename,
            fields=[
                AutofillFieldInfo(field_name=name, display_name=display_name_for_field(name))
                for name in session.fields
            ],
            rows=session.records,
            row_count=len(session),
            dropped_rows=session.dropped_rows,
            warnings=session.warnings,
            expires_in_minutes=self.ttl_minutes,
        )


# Singleton instance
_autofill_import_service: Optional[AutofillImportService] = None


def get_autofill_import_service() -> AutofillImportService:
    """Get or create AutofillImportService instance."""
    global _autofill_import_service
    if _autofill_import_service is None:
        _autofill_import_service = AutofillImportService()
    return _autofill_import_service
