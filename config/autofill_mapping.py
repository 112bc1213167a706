"""
Column mapping for autofill POD spreadsheets.

Declares which spreadsheet headers the import understands, the record field
each one feeds, and how raw cell values are coerced per field.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True)
class ColumnMapping:
    """One known spreadsheet column."""
    excel_column: str
    field_name: str
    required: bool = False


class FieldKind(str, Enum):
    """How a raw cell is coerced for a field."""
    STRING = "STRING"
    NUMBER = "NUMBER"
    BOOLEAN = "BOOLEAN"


# =============================================================================
# COLUMN MAPPINGS
# =============================================================================
# Header matching is exact and case-sensitive. Order drives all_field_names().

AUTOFILL_COLUMN_MAPPINGS: tuple[ColumnMapping, ...] = (
    ColumnMapping("POD", "pod", required=True),
    ColumnMapping("Internal POD ID", "internal_pod_id"),
    ColumnMapping("POD Type", "pod_type_original"),
    ColumnMapping("POD Program Type", "pod_program_type"),
    ColumnMapping("Project Managers", "project_managers"),
    ColumnMapping("CLLI", "clli"),
    ColumnMapping("City", "city"),
    ColumnMapping("State", "state"),
    ColumnMapping("Router Type", "router_type"),
    ColumnMapping("Router 1", "router1"),
    ColumnMapping("Router 2", "router2"),
    ColumnMapping("Tenant Name", "tenant_name"),
)

_FIELD_BY_COLUMN = {m.excel_column: m.field_name for m in AUTOFILL_COLUMN_MAPPINGS}
_COLUMN_BY_FIELD = {m.field_name: m.excel_column for m in AUTOFILL_COLUMN_MAPPINGS}


# =============================================================================
# FIELD KINDS
# =============================================================================
# Fields not listed here are STRING.

FIELD_KINDS: dict[str, FieldKind] = {
    "priority": FieldKind.NUMBER,
    "total_elapsed_cycle_time": FieldKind.NUMBER,
    "workable_cycle_time": FieldKind.NUMBER,
    "special": FieldKind.BOOLEAN,
}

# Fields that trigger router type derivation when edited
ROUTER_FIELDS = ("router1", "router2")

# Router name suffix -> router type
ROUTER_SUFFIX_TYPES = (
    ("jl1", "Rleaf"),
    ("jl3", "NCX"),
)


# =============================================================================
# LOOKUPS
# =============================================================================

def field_for_column(column_header: Any) -> Optional[str]:
    """
    Get the record field fed by a spreadsheet header.

    Args:
        column_header: Raw header cell (non-strings never match)

    Returns:
        Field name, or None for unrecognized headers
    """
    if not isinstance(column_header, str):
        return None
    return _FIELD_BY_COLUMN.get(column_header)


def display_name_for_field(field_name: str) -> str:
    """Spreadsheet header for a field, or the field name itself if unmapped."""
    return _COLUMN_BY_FIELD.get(field_name, field_name)


def all_field_names() -> list[str]:
    """All mapped field names, in table order."""
    return [m.field_name for m in AUTOFILL_COLUMN_MAPPINGS]


def required_columns() -> list[str]:
    """Headers that must be present for rows to be importable."""
    return [m.excel_column for m in AUTOFILL_COLUMN_MAPPINGS if m.required]


def field_kind(field_name: str) -> FieldKind:
    return FIELD_KINDS.get(field_name, FieldKind.STRING)
