from typing import List

from fastapi import APIRouter, HTTPException

from nrdp_reporter.config import ConfigurationError, get_settings
from nrdp_reporter.models.metric import MetricSpec
from nrdp_reporter.models.outcome import GroupReport
from nrdp_reporter.models.process_group import ProcessGroupStatus
from nrdp_reporter.services import metric_walker

router = APIRouter()


@router.post(
    "/run",
    response_model=List[GroupReport],
    summary="Run one reporting cycle",
)
def run_report(snapshot: ProcessGroupStatus) -> List[GroupReport]:
    """
    Evaluate the posted process-group snapshot and submit one NRDP batch per
    visited group.

    Submission failures are part of the returned reports, not HTTP errors.
    Invalid reporter settings result in a HTTP 503 Service Unavailable.
    """
    try:
        settings = get_settings()
    except ConfigurationError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc

    return metric_walker.run(snapshot, settings)


@router.get(
    "/metrics",
    response_model=List[MetricSpec],
    summary="Configured metrics",
)
async def configured_metrics() -> List[MetricSpec]:
    """Return mode and thresholds of every supported metric, in report order."""
    try:
        settings = get_settings()
    except ConfigurationError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc

    return list(settings.metric_specs())
