"""
Spreadsheet parsers for uploads.
"""

from parsers.spreadsheet_decoder import decode_spreadsheet, DecodedSheet
from parsers.autofill_parser import (
    parse_autofill_spreadsheet,
    normalize_rows,
    coerce_field_value,
    determine_router_type,
    apply_router_type,
    AutofillParseResult,
)

__all__ = [
    "decode_spreadsheet",
    "DecodedSheet",
    "parse_autofill_spreadsheet",
    "normalize_rows",
    "coerce_field_value",
    "determine_router_type",
    "apply_router_type",
    "AutofillParseResult",
]
