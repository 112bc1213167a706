"""
POD listing schemas.
"""

from pydantic import Field
from typing import Optional
from datetime import datetime

from models.base import BaseSchema


class PodSummary(BaseSchema):
    """Active POD as shown on the dashboard."""

    id: str = Field(..., description="POD UUID")
    pod: str = Field(..., description="POD identifier")
    status: Optional[str] = Field(None, description="Workflow status")
    sub_status: Optional[str] = Field(None, description="Workflow sub-status")
    assigned_engineer: Optional[str] = Field(None, description="Assigned engineer")
    org: Optional[str] = Field(None, description="Owning organization")
    pod_program_type: Optional[str] = Field(None, description="POD program type")
    pod_type_original: Optional[str] = Field(None, description="POD type")
    creation_timestamp: Optional[datetime] = Field(None, description="When the POD was created")
    sla_calculated_nbd: Optional[datetime] = Field(None, description="SLA next-business-day deadline")


class ActivePodFilters(BaseSchema):
    """Distinct non-empty values across all active PODs."""

    orgs: list[str] = Field(default_factory=list)
    pod_program_types: list[str] = Field(default_factory=list)
    pod_types: list[str] = Field(default_factory=list)
    engineers: list[str] = Field(default_factory=list)


class ActivePodsResponse(BaseSchema):
    """Active PODs plus the filter options derived from them."""

    pods: list[PodSummary] = Field(default_factory=list)
    filters: ActivePodFilters = Field(default_factory=ActivePodFilters)
