"""
Reporting cycle over a process-group snapshot tree.

One cycle visits the root group and, when recursing, every descendant in
pre-order. Each visited group gets its own batch and its own NRDP
submission, so a failing group never stops the traversal.

The walker keeps no state between calls but is not meant to run
concurrently with itself; the hosting scheduler serialises cycles.
"""

import logging
import socket
from typing import Iterator, List, Optional, Sequence, Union

import httpx

from nrdp_reporter.config import Settings
from nrdp_reporter.models.checkresult import CheckResultBatch
from nrdp_reporter.models.metric import MetricSpec
from nrdp_reporter.models.outcome import GroupReport, OutcomeKind, SubmissionOutcome
from nrdp_reporter.models.process_group import ProcessGroupStatus
from nrdp_reporter.services import payload_encoder, receiver_client
from nrdp_reporter.services.data_size import format_data_size
from nrdp_reporter.services.threshold import evaluate

logger = logging.getLogger(__name__)


class HostnameError(RuntimeError):
    """The local host name could not be determined."""


def resolve_hostname(settings: Settings) -> str:
    """
    Return the configured host name, falling back to the local host name as
    resolved through DNS (canonical name if the resolver reports one).

    Raises HostnameError if the local name cannot be resolved.
    """
    if settings.hostname:
        return settings.hostname
    try:
        hostname = socket.gethostname()
        addresses = socket.getaddrinfo(hostname, None, flags=socket.AI_CANONNAME)
    except OSError as exc:
        raise HostnameError(f"could not resolve local host name: {exc}") from exc

    canonical = next((info[3] for info in addresses if info[3]), None)
    resolved = canonical or hostname
    if not resolved:
        raise HostnameError("local host name is empty")
    return resolved


def iter_groups(root: ProcessGroupStatus, recurse: bool) -> Iterator[ProcessGroupStatus]:
    """Yield the root group and, if recurse is set, its descendants in pre-order."""
    yield root
    if recurse:
        for child in root.process_group_status:
            yield from iter_groups(child, recurse)


def sample(group: ProcessGroupStatus, spec: MetricSpec) -> Union[int, float]:
    return getattr(group, spec.definition.accessor)


def build_batch(
    group: ProcessGroupStatus,
    specs: Sequence[MetricSpec],
    host_name: str,
    include_performance_data: bool,
) -> CheckResultBatch:
    """Evaluate every enabled metric of one group into a batch."""
    batch = CheckResultBatch()

    for spec in specs:
        if not spec.enabled:
            continue

        definition = spec.definition
        value = sample(group, spec)
        # data metrics are compared in bytes but shown as e.g. '12.4 MB'
        formatted = format_data_size(value) if definition.unit.is_data else None

        verdict = evaluate(
            definition.label,
            definition.comment,
            value,
            spec.warning,
            spec.critical,
            definition.perf_key,
            spec.mode,
            formatted_value=formatted,
        )
        batch.append(
            f"{group.name} - {definition.title}",
            host_name,
            verdict,
            include_performance_data,
        )

    return batch


def _log_outcome(group: ProcessGroupStatus, url: str, outcome: SubmissionOutcome) -> None:
    if outcome.kind is OutcomeKind.SUCCESS:
        logger.info("Posted metrics for group %s to NRDP host %s", group.name, url)
    elif outcome.kind is OutcomeKind.RECEIVER_REJECTED:
        logger.error(
            "NRDP host %s rejected metrics for group %s: %s",
            url,
            group.name,
            outcome.message or "<no message>",
        )
    elif outcome.status_code is not None:
        logger.error(
            "Error accessing %s for group %s: HTTP %s",
            url,
            group.name,
            outcome.status_code,
        )
    else:
        logger.error(
            "Error connecting to NRDP host %s for group %s: %s",
            url,
            group.name,
            outcome.cause,
        )


def report_group(
    group: ProcessGroupStatus,
    settings: Settings,
    specs: Sequence[MetricSpec],
    host_name: Optional[str],
    client: httpx.Client,
    host_error: Optional[str] = None,
) -> GroupReport:
    """Build, encode and submit one group's batch. Never raises for runtime failures."""
    if host_name is None:
        logger.error(
            "Skipping NRDP submission for group %s to %s: %s",
            group.name,
            settings.nrdp_url,
            host_error,
        )
        return GroupReport(group_name=group.name, error=host_error)

    batch = build_batch(group, specs, host_name, settings.include_performance_data)

    try:
        payload = payload_encoder.encode(batch)
    except payload_encoder.EncodingError as exc:
        logger.error(
            "Error encoding metrics for group %s (NRDP host %s): %s",
            group.name,
            settings.nrdp_url,
            exc,
        )
        return GroupReport(group_name=group.name, batch_size=len(batch), error=str(exc))

    outcome = receiver_client.submit(
        settings.nrdp_url,
        settings.nrdp_token,
        payload,
        client=client,
        timeout=settings.timeout_seconds,
    )
    _log_outcome(group, settings.nrdp_url, outcome)

    return GroupReport(group_name=group.name, batch_size=len(batch), outcome=outcome)


def run(
    root: ProcessGroupStatus,
    settings: Settings,
    recurse: Optional[bool] = None,
    client: Optional[httpx.Client] = None,
) -> List[GroupReport]:
    """
    Run one reporting cycle and return one GroupReport per visited group.

    recurse defaults to settings.report_all_groups. The host name is
    resolved once for the whole cycle; if that fails every group is
    reported as skipped. A client passed in is reused and left open.
    """
    if recurse is None:
        recurse = settings.report_all_groups

    specs = settings.metric_specs()

    host_name: Optional[str] = None
    host_error: Optional[str] = None
    try:
        host_name = resolve_hostname(settings)
    except HostnameError as exc:
        host_error = str(exc)

    own_client = client is None
    if own_client:
        client = httpx.Client(timeout=settings.timeout_seconds)

    try:
        return [
            report_group(group, settings, specs, host_name, client, host_error=host_error)
            for group in iter_groups(root, recurse)
        ]
    finally:
        if own_client:
            client.close()
