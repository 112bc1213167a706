"""
Shared test fixtures.
"""

import os
import sys
from pathlib import Path

# Add backend directory to Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Settings are loaded at import time; tests never reach a real project
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("AUTOFILL_INGEST_URL", "http://ingest.test/api/autofill-pods")

import pytest
from unittest.mock import patch
from datetime import datetime
from typing import Generator

# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data: list = None, count: int = None):
        self.data = data or []
        self.count = count if count is not None else len(self.data)


class MockSupabaseQuery:
    """Mock Supabase query builder with chainable methods."""

    def __init__(self, data: list = None, count: int = None):
        self._data = data or []
        self._count = count
        self._is_single = False

    def select(self, *args, **kwargs):
        return self

    def update(self, data):
        # Simulate update - merge with existing data
        updated_data = []
        for item in self._data:
            merged = {**item, **data}
            merged["updated_at"] = datetime.utcnow().isoformat() + "Z"
            updated_data.append(merged)
        self._data = updated_data
        return self

    def eq(self, column, value):
        return self

    def single(self):
        self._is_single = True
        return self

    def order(self, column, **kwargs):
        return self

    def range(self, start, end):
        return self

    def limit(self, count):
        return self

    def execute(self) -> MockSupabaseResponse:
        if self._is_single:
            data = self._data[0] if self._data else None
            return MockSupabaseResponse(
                data=data,
                count=1 if data else 0
            )
        return MockSupabaseResponse(
            data=self._data,
            count=self._count if self._count is not None else len(self._data)
        )


class MockSupabaseTable:
    """Mock Supabase table with configurable responses."""

    def __init__(self, data: list = None, count: int = None):
        self._data = data or []
        self._count = count

    def select(self, *args, **kwargs):
        return MockSupabaseQuery([dict(row) for row in self._data], self._count)

    def update(self, data):
        query = MockSupabaseQuery([dict(row) for row in self._data], self._count)
        return query.update(data)


class MockSupabaseClient:
    """Mock Supabase client."""

    def __init__(self):
        self._tables = {}

    def set_table_data(self, table_name: str, data: list, count: int = None):
        """Configure mock data for a table."""
        self._tables[table_name] = {"data": data, "count": count}

    def table(self, name: str) -> MockSupabaseTable:
        """Get mock table."""
        config = self._tables.get(name, {"data": [], "count": None})
        return MockSupabaseTable(config["data"], config["count"])


# ===================
# FIXTURES
# ===================

@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("pods", [
                {"id": "1", "pod": "POD-1", ...}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the database client with mock.

    Usage:
        def test_something(mock_db, mock_supabase):
            mock_supabase.set_table_data("users", [...])
    """
    with patch("config.database.get_supabase_client", return_value=mock_supabase):
        with patch("services.pod_service.get_supabase_client", return_value=mock_supabase):
            with patch("services.user_service.get_supabase_client", return_value=mock_supabase):
                yield mock_supabase


@pytest.fixture(autouse=True)
def reset_service_state():
    """Clear cached import sessions and service singletons between tests."""
    import services.autofill_import_service as autofill_module
    import services.pod_service as pod_module
    import services.user_service as user_module
    from services import session_cache_service

    session_cache_service.clear_sessions()
    autofill_module._autofill_import_service = None
    pod_module._pod_service = None
    user_module._user_service = None
    yield
    session_cache_service.clear_sessions()


@pytest.fixture
def sample_user_data() -> dict:
    """Sample user row for testing."""
    return {
        "id": "user-uuid-123",
        "email": "jane.doe@example.com",
        "name": "Jane Doe",
        "role": "REGULAR",
        "created_at": "2025-12-05T10:00:00Z",
        "updated_at": "2025-12-05T10:00:00Z"
    }


@pytest.fixture
def sample_pods_list() -> list:
    """Sample active POD rows for testing."""
    return [
        {
            "id": "pod-uuid-1",
            "pod": "ATL-001",
            "status": "IN_PROGRESS",
            "sub_status": "CABLING",
            "assigned_engineer": "Alex Kim",
            "org": "East",
            "pod_program_type": "Expansion",
            "pod_type_original": "Rleaf",
            "creation_timestamp": "2025-11-01T09:00:00Z",
            "sla_calculated_nbd": "2025-12-01T17:00:00Z"
        },
        {
            "id": "pod-uuid-2",
            "pod": "BOS-014",
            "status": "NEW",
            "sub_status": None,
            "assigned_engineer": None,
            "org": "East",
            "pod_program_type": "Greenfield",
            "pod_type_original": "",
            "creation_timestamp": "2025-11-03T09:00:00Z",
            "sla_calculated_nbd": None
        },
        {
            "id": "pod-uuid-3",
            "pod": "DEN-220",
            "status": "BLOCKED",
            "sub_status": "POWER",
            "assigned_engineer": "Sam Rivera",
            "org": "West",
            "pod_program_type": "Expansion",
            "pod_type_original": "NCX",
            "creation_timestamp": "2025-11-05T09:00:00Z",
            "sla_calculated_nbd": None
        }
    ]


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client():
    """
    Create FastAPI test client.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/api/autofill/mappings")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)


@pytest.fixture
def test_client_with_mock_db(mock_db):
    """FastAPI test client with the Supabase client patched."""
    from fastapi.testclient import TestClient
    from main import app

    yield TestClient(app)
