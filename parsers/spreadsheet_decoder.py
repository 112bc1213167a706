"""
Spreadsheet decoder for uploaded files.

Turns raw workbook bytes into a header row plus data rows of loosely typed
cells. Only the first sheet is read. Cell typing is left to the caller.
"""

from dataclasses import dataclass, field
from io import BytesIO
from typing import Any, Optional, Union
import structlog

import pandas as pd

from exceptions import (
    SpreadsheetLoadError,
    SpreadsheetFormatError,
    SpreadsheetDecodeError,
)

logger = structlog.get_logger(__name__)

# pandas engines, tried in order (openpyxl: xlsx/xlsm, xlrd: legacy xls)
DEFAULT_ENGINES = ("openpyxl", "xlrd")
LEGACY_ENGINES = ("xlrd", "openpyxl")

SUPPORTED_EXTENSIONS = (".xlsx", ".xlsm", ".xls")


@dataclass
class DecodedSheet:
    """First sheet of a workbook: header cells and data rows."""
    sheet_name: str
    headers: list[Any] = field(default_factory=list)
    rows: list[list[Any]] = field(default_factory=list)
    blank_rows: int = 0


def decode_spreadsheet(
    content: Union[bytes, BytesIO],
    filename: Optional[str] = None,
) -> DecodedSheet:
    """
    Decode the first sheet of an uploaded workbook.

    Args:
        content: Raw file bytes or a file-like object
        filename: Original file name, used to pick the engine order

    Returns:
        DecodedSheet with the first row as headers and the rest as rows

    Raises:
        SpreadsheetLoadError: The spreadsheet engine is not installed
        SpreadsheetFormatError: Fewer than two non-empty rows
        SpreadsheetDecodeError: The content is not a readable workbook
    """
    buffer = content if isinstance(content, BytesIO) else BytesIO(content)
    engines = _engines_for(filename)

    logger.info("decoding_spreadsheet", filename=filename, engines=list(engines))

    load_errors: dict[str, str] = {}
    decode_errors: dict[str, str] = {}
    sheet_name = None
    raw_rows = None

    for engine in engines:
        buffer.seek(0)
        try:
            with pd.ExcelFile(buffer, engine=engine) as excel:
                if not excel.sheet_names:
                    raise SpreadsheetFormatError(row_count=0)
                sheet_name = str(excel.sheet_names[0])
                # Text like "NA" or "null" is data, not a missing value
                df = excel.parse(
                    sheet_name,
                    header=None,
                    dtype=object,
                    keep_default_na=False,
                    na_filter=False,
                )
            raw_rows = df.values.tolist()
            break
        except SpreadsheetFormatError:
            raise
        except ImportError as e:
            load_errors[engine] = str(e)
        except Exception as e:
            decode_errors[engine] = f"{type(e).__name__}: {e}"

    if raw_rows is None:
        # Preferred engine missing means the reader itself is unavailable
        if engines[0] in load_errors:
            logger.error("spreadsheet_engine_unavailable", errors=load_errors)
            raise SpreadsheetLoadError(details={"engines": load_errors})
        logger.error("spreadsheet_decode_failed", errors=decode_errors)
        raise SpreadsheetDecodeError(details={"engines": decode_errors})

    rows, blank_rows = _collect_rows(raw_rows)

    if len(rows) < 2:
        logger.warning("spreadsheet_too_few_rows", row_count=len(rows))
        raise SpreadsheetFormatError(row_count=len(rows))

    logger.info(
        "spreadsheet_decoded",
        sheet=sheet_name,
        header_count=len(rows[0]),
        data_rows=len(rows) - 1,
        blank_rows=blank_rows,
    )

    return DecodedSheet(
        sheet_name=sheet_name,
        headers=rows[0],
        rows=rows[1:],
        blank_rows=blank_rows,
    )


# ===================
# HELPER FUNCTIONS
# ===================

def _engines_for(filename: Optional[str]) -> tuple[str, ...]:
    """Engine order for a file name (legacy .xls tries xlrd first)."""
    if filename and filename.lower().endswith(".xls"):
        return LEGACY_ENGINES
    return DEFAULT_ENGINES


def _collect_rows(raw_rows: list[list[Any]]) -> tuple[list[list[Any]], int]:
    """
    Clean rows and drop the empty ones.

    Returns:
        (non-empty rows, count of blank rows between the first and last of them)
    """
    rows: list[list[Any]] = []
    blank_rows = 0
    pending_blank = 0
    for raw in raw_rows:
        row = _clean_row(raw)
        if not row:
            if rows:
                pending_blank += 1
            continue
        blank_rows += pending_blank
        pending_blank = 0
        rows.append(row)
    return rows, blank_rows


def _clean_row(row: list[Any]) -> list[Any]:
    """Clean cells and drop trailing empties, so rows may be ragged."""
    cells = [_clean_cell(value) for value in row]
    while cells and cells[-1] is None:
        cells.pop()
    return cells


def _clean_cell(value: Any) -> Any:
    """
    Normalize a pandas cell.

    NaN / NaT / "" -> None
    3.0 -> 3 (xls stores every number as float)
    """
    if value is None or value == "":
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value
