import os
from functools import lru_cache
from typing import Dict, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from nrdp_reporter.models.metric import METRIC_DEFINITIONS, MetricDefinition, MetricMode, MetricSpec
from nrdp_reporter.services.data_size import parse_data_size

Threshold = Union[int, float]

_ENABLED = "enabled"
_DISABLED = "disabled"


class ConfigurationError(RuntimeError):
    """Raised when the reporter settings are incomplete or invalid."""


class MetricThresholds(BaseModel):
    """Configured mode and thresholds for one metric."""

    model_config = ConfigDict(frozen=True)

    mode: MetricMode = MetricMode.DISABLED
    warning: Optional[Threshold] = Field(None, ge=0)
    critical: Optional[Threshold] = Field(None, ge=0)

    @model_validator(mode="after")
    def _alerting_needs_thresholds(self) -> "MetricThresholds":
        if self.mode is MetricMode.ALERTING and (self.warning is None or self.critical is None):
            raise ValueError("warning and critical thresholds are required in Alerting mode")
        return self


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    nrdp_url: str = Field(
        ...,
        min_length=1,
        description="URL where Nagios NRDP is running, e.g. http://nagios/nrdp/",
    )
    nrdp_token: str = Field(
        ...,
        min_length=1,
        description="NRDP token used to authenticate submissions",
    )
    hostname: Optional[str] = Field(
        default=None,
        description="Host name to post check results for; defaults to the local host name",
    )
    include_performance_data: bool = Field(
        default=True,
        description="Append performance data to every check output",
    )
    report_all_groups: bool = Field(
        default=True,
        description="Report every process group, not only the root group",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for one HTTP exchange with the NRDP receiver",
    )
    metrics: Dict[str, MetricThresholds] = Field(
        default_factory=dict,
        description="Per-metric mode and thresholds, keyed by metric key",
    )

    @field_validator("metrics")
    @classmethod
    def _known_metrics_only(cls, value: Dict[str, MetricThresholds]) -> Dict[str, MetricThresholds]:
        known = {definition.key for definition in METRIC_DEFINITIONS}
        unknown = sorted(set(value) - known)
        if unknown:
            raise ValueError(f"unknown metrics: {', '.join(unknown)}")
        return value

    def metric_specs(self) -> Tuple[MetricSpec, ...]:
        """Return one MetricSpec per supported metric, in declaration order."""
        specs = []
        for definition in METRIC_DEFINITIONS:
            thresholds = self.metrics.get(definition.key, MetricThresholds())
            specs.append(
                MetricSpec(
                    definition=definition,
                    mode=thresholds.mode,
                    warning=thresholds.warning,
                    critical=thresholds.critical,
                )
            )
        return tuple(specs)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        try:
            metrics = {
                definition.key: _thresholds_from_env(env, definition)
                for definition in METRIC_DEFINITIONS
            }
            return cls(
                nrdp_url=env.get("NRDP_URL", "").strip(),
                nrdp_token=env.get("NRDP_TOKEN", "").strip(),
                hostname=env.get("NRDP_HOSTNAME", "").strip() or None,
                include_performance_data=_parse_toggle(
                    env.get("NRDP_PERFORMANCE_DATA"), "NRDP_PERFORMANCE_DATA"
                ),
                report_all_groups=_parse_toggle(
                    env.get("NRDP_REPORT_ALL_GROUPS"), "NRDP_REPORT_ALL_GROUPS"
                ),
                timeout_seconds=float(env.get("NRDP_TIMEOUT_SECONDS", "30")),
                metrics=metrics,
            )
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid NRDP reporter settings: {exc}") from exc
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc


def _parse_toggle(raw: Optional[str], name: str) -> bool:
    # Enabled unless explicitly switched off
    if raw is None or not raw.strip():
        return True
    value = raw.strip().lower()
    if value == _ENABLED:
        return True
    if value == _DISABLED:
        return False
    raise ValueError(f"{name} must be 'Enabled' or 'Disabled', got {raw!r}")


def _parse_threshold(raw: str, definition: MetricDefinition, name: str) -> Threshold:
    if definition.unit.is_data:
        try:
            return parse_data_size(raw)
        except ValueError as exc:
            raise ValueError(f"{name}: {exc}") from exc
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be a whole number, got {raw!r}") from exc


def _thresholds_from_env(env: Mapping[str, str], definition: MetricDefinition) -> MetricThresholds:
    prefix = definition.key.upper()
    raw_mode = env.get(prefix, "").strip()
    mode = MetricMode.parse(raw_mode) if raw_mode else MetricMode.DISABLED

    thresholds: Dict[str, Optional[Threshold]] = {"warning": None, "critical": None}
    for field, suffix in (("warning", "_WARN"), ("critical", "_CRIT")):
        raw = env.get(prefix + suffix, "").strip()
        if raw:
            thresholds[field] = _parse_threshold(raw, definition, prefix + suffix)

    try:
        return MetricThresholds(mode=mode, **thresholds)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid settings for {prefix}: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
