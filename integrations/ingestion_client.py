"""
Client for the autofill POD ingestion endpoint.

Sends the whole working set as one {"pods": [...]} batch. The batch is
all-or-nothing from our side: any 2xx is success, anything else is failure.
"""

from typing import Optional
import requests
import structlog

from config import settings
from models.autofill import AutofillPodRecord
from exceptions import PodImportError

logger = structlog.get_logger(__name__)


def get_ingest_config() -> tuple[str, Optional[float]]:
    """
    Get ingestion endpoint configuration.

    Returns:
        tuple: (url, timeout_seconds)
    """
    return settings.autofill_ingest_url, settings.autofill_ingest_timeout_seconds


def build_payload(records: list[AutofillPodRecord]) -> dict:
    """Build the request body in the endpoint's camelCase shape."""
    return {"pods": [record.to_ingest_payload() for record in records]}


def submit_autofill_pods(records: list[AutofillPodRecord]) -> int:
    """
    Post records to the ingestion endpoint.

    Args:
        records: Records to import, in working set order

    Returns:
        Number of records sent

    Raises:
        PodImportError: Transport failure or non-2xx response
    """
    url, timeout = get_ingest_config()
    payload = build_payload(records)

    logger.info("submitting_autofill_pods", url=url, count=len(records))

    try:
        response = requests.post(url, json=payload, timeout=timeout)
    except requests.exceptions.RequestException as e:
        logger.error("autofill_ingest_request_failed", error=str(e))
        raise PodImportError(details={"reason": str(e)}) from e

    if not 200 <= response.status_code < 300:
        logger.error(
            "autofill_ingest_rejected",
            status_code=response.status_code,
            body=response.text[:500],
        )
        raise PodImportError(details={"status_code": response.status_code})

    logger.info("autofill_pods_submitted", count=len(records), status_code=response.status_code)
    return len(records)
