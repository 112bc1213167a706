"""
POD service for dashboard listings.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.pod import PodSummary, ActivePodFilters, ActivePodsResponse
from exceptions import DatabaseError

logger = structlog.get_logger(__name__)

ACTIVE_POD_COLUMNS = (
    "id, pod, status, sub_status, assigned_engineer, org, pod_program_type, "
    "pod_type_original, creation_timestamp, sla_calculated_nbd"
)


class PodService:
    """
    POD read operations.

    Filtering by org/type/engineer happens on the client; the server always
    returns the full active set plus the options to filter it by.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "pods"

    def get_active_pods(self) -> ActivePodsResponse:
        """
        Get all active (not history, not deleted) PODs ordered by POD name.

        Returns:
            ActivePodsResponse with pods and filter options

        Raises:
            DatabaseError: If the query fails
        """
        logger.info("getting_active_pods")

        try:
            result = (
                self.db.table(self.table)
                .select(ACTIVE_POD_COLUMNS)
                .eq("is_history", False)
                .eq("is_deleted", False)
                .order("pod")
                .execute()
            )
        except Exception as e:
            logger.error("get_active_pods_failed", error=str(e))
            raise DatabaseError("select", str(e))

        pods = [PodSummary(**row) for row in result.data]
        filters = build_filters(pods)

        logger.info(
            "active_pods_retrieved",
            count=len(pods),
            orgs=len(filters.orgs),
            engineers=len(filters.engineers),
        )

        return ActivePodsResponse(pods=pods, filters=filters)


def build_filters(pods: list[PodSummary]) -> ActivePodFilters:
    """Distinct non-empty values per filter, in first-seen order."""
    return ActivePodFilters(
        orgs=_unique(p.org for p in pods),
        pod_program_types=_unique(p.pod_program_type for p in pods),
        pod_types=_unique(p.pod_type_original for p in pods),
        engineers=_unique(p.assigned_engineer for p in pods),
    )


def _unique(values) -> list[str]:
    return list(dict.fromkeys(v for v in values if v))


# Singleton instance
_pod_service: Optional[PodService] = None


def get_pod_service() -> PodService:
    """Get or create PodService instance."""
    global _pod_service
    if _pod_service is None:
        _pod_service = PodService()
    return _pod_service
