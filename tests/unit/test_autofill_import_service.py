"""
Unit tests for AutofillImportService and AutofillImportSession.

Run: pytest tests/unit/test_autofill_import_service.py -v
"""

import pytest
from unittest.mock import patch

from models.autofill import AutofillPodRecord
from services.autofill_import_service import (
    AutofillImportService,
    AutofillImportSession,
    get_autofill_import_service,
)
from services import session_cache_service
from exceptions import (
    AutofillSessionNotFoundError,
    AutofillRowNotFoundError,
    AutofillInvalidFieldError,
    AutofillNoDataError,
    AutofillImportInProgressError,
    PodImportError,
)
from tests.factories import create_autofill_excel


SUBMIT_PATH = "services.autofill_import_service.submit_autofill_pods"


def _session(*pods: str) -> AutofillImportSession:
    records = [
        AutofillPodRecord(pod=pod, city="", router1="", router2="", router_type="")
        for pod in pods
    ]
    return AutofillImportSession(records=records, fields=["pod", "city", "router1", "router2"])


def _stored_session(service: AutofillImportService, *pods: str) -> AutofillImportSession:
    session = _session(*pods)
    session_cache_service.store_session(session.id, session, service.ttl_minutes)
    return session


# ===================
# SESSION (WORKING SET)
# ===================

class TestEditCell:
    """Tests for AutofillImportSession.edit_cell()"""

    def test_edit_replaces_only_that_field(self):
        session = _session("ATL-001", "DEN-002")

        session.edit_cell(0, "city", "Atlanta")

        assert session.records[0].city == "Atlanta"
        assert session.records[0].pod == "ATL-001"
        assert session.records[1].city == ""

    def test_edit_number_is_coerced(self):
        session = _session("ATL-001")

        session.edit_cell(0, "priority", "3")

        assert session.records[0].priority == 3.0

    def test_clearing_number_gives_none(self):
        session = _session("ATL-001")
        session.edit_cell(0, "priority", "3")

        session.edit_cell(0, "priority", "")

        assert session.records[0].priority is None

    def test_edit_routers_derives_router_type(self):
        session = _session("ATL-001")

        session.edit_cell(0, "router1", "atl-a-jl1")
        assert session.records[0].router_type == ""

        session.edit_cell(0, "router2", "atl-b-jl1")
        assert session.records[0].router_type == "Rleaf"

    def test_router_edit_overwrites_manual_router_type(self):
        session = _session("ATL-001")
        session.edit_cell(0, "router_type", "Manual")
        session.edit_cell(0, "router1", "atl-a-jl3")

        session.edit_cell(0, "router2", "atl-b-jl3")

        assert session.records[0].router_type == "NCX"

    def test_router_edit_replaces_derived_router_type(self):
        session = AutofillImportSession(
            records=[AutofillPodRecord(
                pod="DEN-003", router1="den-a-jl3", router2="den-b-jl1", router_type="NCX"
            )],
            fields=["pod", "router1", "router2"],
        )

        session.edit_cell(0, "router1", "den-a-jl1")

        assert session.records[0].router_type == "Rleaf"

    def test_router_edit_with_mismatch_clears_router_type(self):
        session = _session("ATL-001")
        session.edit_cell(0, "router1", "atl-a-jl1")
        session.edit_cell(0, "router2", "atl-b-jl1")

        session.edit_cell(0, "router2", "atl-b-jl3")

        assert session.records[0].router_type == ""

    def test_clearing_a_router_keeps_router_type(self):
        session = _session("ATL-001")
        session.edit_cell(0, "router1", "atl-a-jl1")
        session.edit_cell(0, "router2", "atl-b-jl1")

        session.edit_cell(0, "router2", "")

        assert session.records[0].router_type == "Rleaf"

    def test_unknown_field_raises(self):
        session = _session("ATL-001")

        with pytest.raises(AutofillInvalidFieldError):
            session.edit_cell(0, "notes", "x")

    @pytest.mark.parametrize("row_index", [-1, 2, 99])
    def test_out_of_range_row_raises(self, row_index):
        session = _session("ATL-001", "DEN-002")

        with pytest.raises(AutofillRowNotFoundError):
            session.edit_cell(row_index, "city", "x")


class TestRemoveRow:
    """Tests for AutofillImportSession.remove_row()"""

    def test_remove_shifts_later_rows(self):
        session = _session("ATL-001", "BOS-002", "DEN-003")

        removed = session.remove_row(1)

        assert removed.pod == "BOS-002"
        assert [r.pod for r in session.records] == ["ATL-001", "DEN-003"]
        assert session.get_row(1).pod == "DEN-003"

    def test_remove_out_of_range_raises(self):
        session = _session("ATL-001")

        with pytest.raises(AutofillRowNotFoundError):
            session.remove_row(1)


# ===================
# SERVICE
# ===================

class TestCreateSession:
    """Tests for AutofillImportService.create_session()"""

    def test_upload_creates_cached_session(self):
        service = AutofillImportService()
        content = create_autofill_excel([
            ["ATL-001", 1, "Atlanta"],
            [None, 2, "Boston"],
        ])

        session = service.create_session(content, filename="pods.xlsx")

        assert service.get_session(session.id) is session
        assert len(session) == 1
        assert session.dropped_rows == 1
        assert session.filename == "pods.xlsx"

    def test_preview_lists_fields_with_display_names(self):
        service = AutofillImportService()
        session = service.create_session(create_autofill_excel([["ATL-001"]]), filename="pods.xlsx")

        preview = service.to_preview(session)

        assert preview.session_id == session.id
        assert preview.row_count == 1
        assert preview.fields[0].field_name == "pod"
        assert preview.fields[0].display_name == "POD"
        assert preview.expires_in_minutes == service.ttl_minutes


class TestGetSession:
    """Tests for AutofillImportService.get_session()"""

    def test_unknown_session_raises(self):
        service = AutofillImportService()

        with pytest.raises(AutofillSessionNotFoundError):
            service.get_session("does-not-exist")

    def test_discarded_session_is_gone(self):
        service = AutofillImportService()
        session = _stored_session(service, "ATL-001")

        service.discard(session.id)

        with pytest.raises(AutofillSessionNotFoundError):
            service.get_session(session.id)


class TestSubmit:
    """Tests for AutofillImportService.submit()"""

    def test_empty_working_set_makes_no_call(self):
        service = AutofillImportService()
        session = _stored_session(service)

        with patch(SUBMIT_PATH) as mock_submit:
            with pytest.raises(AutofillNoDataError):
                service.submit(session.id)

        mock_submit.assert_not_called()

    def test_success_clears_and_closes_session(self):
        service = AutofillImportService()
        session = _stored_session(service, "ATL-001", "DEN-002")

        with patch(SUBMIT_PATH, return_value=2) as mock_submit:
            result = service.submit(session.id)

        sent = mock_submit.call_args[0][0]
        assert [r.pod for r in sent] == ["ATL-001", "DEN-002"]
        assert result.success is True
        assert result.imported_count == 2
        assert result.message == "Successfully imported 2 autofill pods."
        assert session.records == []
        with pytest.raises(AutofillSessionNotFoundError):
            service.get_session(session.id)

    def test_sends_edited_values(self):
        service = AutofillImportService()
        session = _stored_session(service, "ATL-001")
        service.edit_cell(session.id, 0, "city", "Atlanta")

        with patch(SUBMIT_PATH, return_value=1) as mock_submit:
            service.submit(session.id)

        assert mock_submit.call_args[0][0][0].city == "Atlanta"

    def test_failure_keeps_working_set(self):
        service = AutofillImportService()
        session = _stored_session(service, "ATL-001", "DEN-002")

        with patch(SUBMIT_PATH, side_effect=PodImportError(details={"status_code": 500})):
            with pytest.raises(PodImportError):
                service.submit(session.id)

        kept = service.get_session(session.id)
        assert [r.pod for r in kept.records] == ["ATL-001", "DEN-002"]
        assert kept.is_processing is False

    def test_retry_after_failure_succeeds(self):
        service = AutofillImportService()
        session = _stored_session(service, "ATL-001")

        with patch(SUBMIT_PATH, side_effect=[PodImportError(), 1]):
            with pytest.raises(PodImportError):
                service.submit(session.id)
            result = service.submit(session.id)

        assert result.imported_count == 1

    def test_submit_while_processing_raises_conflict(self):
        service = AutofillImportService()
        session = _stored_session(service, "ATL-001")
        session.is_processing = True

        with patch(SUBMIT_PATH) as mock_submit:
            with pytest.raises(AutofillImportInProgressError) as exc_info:
                service.submit(session.id)

        assert exc_info.value.status_code == 409
        mock_submit.assert_not_called()


class TestSingleton:
    """Tests for get_autofill_import_service()"""

    def test_returns_same_instance(self):
        assert get_autofill_import_service() is get_autofill_import_service()
