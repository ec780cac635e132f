from typing import Optional, Union

from nrdp_reporter.models.checkresult import Severity, Verdict
from nrdp_reporter.models.metric import MetricMode

Number = Union[int, float]


def format_number(value: Number) -> str:
    """Render a metric value without a trailing '.0' for whole numbers."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def evaluate(
    label: str,
    comment: str,
    value: Number,
    warning: Optional[Number],
    critical: Optional[Number],
    perf_key: str,
    mode: Union[MetricMode, str],
    formatted_value: Optional[str] = None,
) -> Verdict:
    """
    Evaluate one metric value and return its Verdict.

    In Alerting mode the critical threshold is checked first, then the
    warning threshold; reaching a threshold counts as breaching it. In
    Reporting mode thresholds are ignored and the severity is always OK.

    formatted_value, if given, replaces the raw value in the message line
    (e.g. '12.4 MB'); comparisons and the performance token always use the
    raw value.
    """
    if not isinstance(mode, MetricMode):
        mode = MetricMode.parse(mode)

    if mode is MetricMode.DISABLED:
        raise ValueError(f"{label} is disabled and must not be evaluated")

    severity = Severity.OK
    if mode is MetricMode.ALERTING:
        if warning is None or critical is None:
            raise ValueError(f"{label} is alerting but has no warning/critical threshold")
        if warning < 0 or critical < 0:
            raise ValueError(f"{label} thresholds must not be negative")
        if value >= critical:
            severity = Severity.CRITICAL
        elif value >= warning:
            severity = Severity.WARNING

    raw = format_number(value)
    shown = formatted_value if formatted_value is not None else raw

    return Verdict(
        severity=severity,
        message=f"{label} {severity.word} - {shown} {comment}",
        performance=f"{perf_key}={raw}",
    )
