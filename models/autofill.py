"""
Autofill POD import schemas.

An AutofillPodRecord is one normalized spreadsheet row awaiting submission.
Field types follow the static kind table in config.autofill_mapping.
"""

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, Optional, Union

from models.base import BaseSchema


class AutofillPodRecord(BaseSchema):
    """
    Normalized autofill POD row.

    String fields are None when their column was not in the upload and ""
    when the column was present but the cell was empty.
    """

    # Cell text is kept as-is
    model_config = ConfigDict(str_strip_whitespace=False)

    pod: str = Field(default="", description="POD identifier (required to import)")
    internal_pod_id: Optional[str] = Field(None, description="Internal POD ID")
    pod_type_original: Optional[str] = Field(None, description="POD type as written in the sheet")
    pod_program_type: Optional[str] = Field(None, description="POD program type")
    project_managers: Optional[str] = Field(None, description="Project managers")
    clli: Optional[str] = Field(None, description="CLLI code")
    city: Optional[str] = Field(None, description="City")
    state: Optional[str] = Field(None, description="State")
    router_type: Optional[str] = Field(None, description="Rleaf, NCX, or empty when undetermined")
    router1: Optional[str] = Field(None, description="First router name")
    router2: Optional[str] = Field(None, description="Second router name")
    tenant_name: Optional[str] = Field(None, description="Tenant name")

    priority: Optional[Union[int, float]] = Field(None, description="Priority")
    total_elapsed_cycle_time: Optional[Union[int, float]] = Field(None, description="Total elapsed cycle time")
    workable_cycle_time: Optional[Union[int, float]] = Field(None, description="Workable cycle time")
    special: Optional[bool] = Field(None, description="Special handling flag")

    def to_ingest_payload(self) -> dict[str, Any]:
        """Convert to the ingestion endpoint's camelCase shape, omitting absent fields."""
        return {
            to_camel(key): value
            for key, value in self.model_dump(exclude_none=True).items()
        }


class AutofillFieldInfo(BaseSchema):
    """A grid column: record field plus its spreadsheet header."""

    field_name: str
    display_name: str


class AutofillColumnMappingResponse(BaseSchema):
    """One entry of the column mapping table."""

    excel_column: str
    field_name: str
    required: bool


class AutofillPreviewResponse(BaseSchema):
    """Current state of an import session."""

    session_id: str = Field(..., description="UUID to reference this import session")
    filename: Optional[str] = Field(None, description="Uploaded file name")
    fields: list[AutofillFieldInfo] = Field(
        default_factory=list,
        description="Mapped columns found in the header, in header order"
    )
    rows: list[AutofillPodRecord] = Field(default_factory=list)
    row_count: int = Field(..., description="Rows in the working set")
    dropped_rows: int = Field(default=0, description="Rows discarded for an empty POD")
    warnings: list[str] = Field(default_factory=list)
    expires_in_minutes: int = Field(default=30, description="Idle minutes until the session expires")


class AutofillCellEdit(BaseSchema):
    """Edit a single cell in the working set."""

    model_config = ConfigDict(str_strip_whitespace=False)

    field: str = Field(..., min_length=1, description="Record field name")
    value: Optional[str] = Field(default="", description="New raw text value")


class AutofillRowResponse(BaseSchema):
    """A single row after an edit."""

    row_index: int
    row: AutofillPodRecord


class AutofillSubmitResponse(BaseSchema):
    """Result of submitting the working set."""

    success: bool
    imported_count: int
    message: str
