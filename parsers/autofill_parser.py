"""
Autofill POD spreadsheet parser.

Maps decoded spreadsheet rows to AutofillPodRecord objects using the column
mapping table, coercing each cell by field kind and deriving router type
from the two router names.

Coercion uses loose truthiness: None, "", 0 and False count as empty.
"""

from dataclasses import dataclass, field
from io import BytesIO
from typing import Any, Optional, Union
import math
import structlog

from config.autofill_mapping import (
    FieldKind,
    ROUTER_SUFFIX_TYPES,
    field_for_column,
    field_kind,
    required_columns,
)
from models.autofill import AutofillPodRecord
from parsers.spreadsheet_decoder import decode_spreadsheet

logger = structlog.get_logger(__name__)


@dataclass
class AutofillParseResult:
    """Result of normalizing an autofill spreadsheet."""
    records: list[AutofillPodRecord] = field(default_factory=list)
    fields: list[str] = field(default_factory=list)
    dropped_rows: int = 0
    unmapped_columns: list[str] = field(default_factory=list)
    missing_required_columns: list[str] = field(default_factory=list)
    blank_rows: int = 0

    @property
    def has_data(self) -> bool:
        """True if any row survived normalization."""
        return len(self.records) > 0

    @property
    def warnings(self) -> list[str]:
        """Non-blocking notices for the preview."""
        messages = []
        if self.missing_required_columns:
            messages.append(
                f"Missing required column(s): {', '.join(self.missing_required_columns)}. "
                "Rows without a POD are skipped."
            )
        if self.unmapped_columns:
            messages.append(
                f"Ignored {len(self.unmapped_columns)} unrecognized column(s): "
                f"{', '.join(self.unmapped_columns)}"
            )
        if self.dropped_rows:
            messages.append(f"{self.dropped_rows} row(s) without a POD were skipped")
        if self.blank_rows:
            messages.append(f"{self.blank_rows} blank row(s) were skipped")
        return messages


def parse_autofill_spreadsheet(
    content: Union[bytes, BytesIO],
    filename: Optional[str] = None,
) -> AutofillParseResult:
    """
    Decode an uploaded workbook and normalize its rows.

    Args:
        content: Raw file bytes or file-like object
        filename: Original file name

    Returns:
        AutofillParseResult with accepted records and observed fields

    Raises:
        SpreadsheetLoadError, SpreadsheetFormatError, SpreadsheetDecodeError
    """
    sheet = decode_spreadsheet(content, filename=filename)
    result = normalize_rows(sheet.headers, sheet.rows)
    result.blank_rows = sheet.blank_rows

    logger.info(
        "autofill_spreadsheet_parsed",
        filename=filename,
        sheet=sheet.sheet_name,
        records=len(result.records),
        dropped=result.dropped_rows,
        blank=result.blank_rows,
        fields=result.fields,
        unmapped=result.unmapped_columns,
    )

    return result


def normalize_rows(headers: list[Any], rows: list[list[Any]]) -> AutofillParseResult:
    """
    Convert raw rows to records, zipping each row against the header.

    Unmapped columns are skipped. Short rows read missing cells as None.
    Rows whose POD ends up empty are dropped.

    Args:
        headers: Header cells
        rows: Data rows (may be shorter or longer than headers)

    Returns:
        AutofillParseResult
    """
    result = AutofillParseResult()

    mapped_columns: list[tuple[int, str]] = []
    for index, header in enumerate(headers):
        field_name = field_for_column(header)
        if field_name is None:
            if header is not None:
                result.unmapped_columns.append(str(header))
            continue
        mapped_columns.append((index, field_name))
        if field_name not in result.fields:
            result.fields.append(field_name)

    result.missing_required_columns = [
        column for column in required_columns() if column not in headers
    ]

    for row in rows:
        values: dict[str, Any] = {}
        for index, field_name in mapped_columns:
            raw = row[index] if index < len(row) else None
            values[field_name] = coerce_field_value(field_name, raw)

        record = AutofillPodRecord(**values)
        apply_router_type(record)

        if not record.pod:
            result.dropped_rows += 1
            continue

        result.records.append(record)

    if result.missing_required_columns:
        logger.warning(
            "autofill_required_columns_missing",
            missing=result.missing_required_columns,
        )

    return result


# ===================
# COERCION
# ===================

def coerce_field_value(field_name: str, raw: Any) -> Any:
    """
    Coerce a raw cell (or edited text) for a field.

    NUMBER  -> int when integral, else float; None when empty/unparseable
              (never 0 for empty)
    BOOLEAN -> True when truthy, else None
    STRING  -> str(raw) when truthy, else ""
    """
    kind = field_kind(field_name)

    if kind is FieldKind.NUMBER:
        if not _is_truthy(raw):
            return None
        return _to_number(field_name, raw)

    if kind is FieldKind.BOOLEAN:
        return True if _is_truthy(raw) else None

    return str(raw) if _is_truthy(raw) else ""


def _is_truthy(value: Any) -> bool:
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def _to_number(field_name: str, raw: Any) -> Optional[Union[int, float]]:
    """Parse a number, logging and returning None for junk like '1,000'."""
    try:
        number = float(raw) if isinstance(raw, (int, float)) else float(str(raw).strip())
    except (TypeError, ValueError):
        logger.warning("autofill_number_unparseable", field=field_name, value=str(raw))
        return None
    if not math.isfinite(number):
        logger.warning("autofill_number_unparseable", field=field_name, value=str(raw))
        return None
    return int(number) if number.is_integer() else number


# ===================
# ROUTER TYPE
# ===================

def determine_router_type(router1: Optional[str], router2: Optional[str]) -> Optional[str]:
    """
    Infer router type from the two router names.

    Both end in "jl1" -> "Rleaf"
    Both end in "jl3" -> "NCX"
    Anything else     -> "" (no determination)

    Returns None when either name is missing; callers then leave
    router_type untouched.
    """
    if not router1 or not router2:
        return None

    r1 = router1.lower()
    r2 = router2.lower()
    for suffix, router_type in ROUTER_SUFFIX_TYPES:
        if r1.endswith(suffix) and r2.endswith(suffix):
            return router_type
    return ""


def apply_router_type(record: AutofillPodRecord) -> None:
    """Fill router_type from the router names when the sheet left it empty."""
    if record.router_type or not (record.router1 or record.router2):
        return
    derived = determine_router_type(record.router1, record.router2)
    if derived is not None:
        record.router_type = derived
