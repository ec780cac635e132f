from enum import Enum
from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class MetricMode(str, Enum):
    """How a single metric takes part in a reporting cycle."""

    DISABLED = "Disabled"
    REPORTING = "Reporting"
    ALERTING = "Alerting"

    @classmethod
    def parse(cls, raw: str) -> "MetricMode":
        for mode in cls:
            if mode.value.lower() == raw.strip().lower():
                return mode
        allowed = ", ".join(mode.value for mode in cls)
        raise ValueError(f"unknown metric mode {raw!r}, expected one of: {allowed}")


class UnitKind(str, Enum):
    COUNT = "count"
    DATA_SIZE = "data_size"
    DATA_RATE = "data_rate"

    @property
    def is_data(self) -> bool:
        return self is not UnitKind.COUNT


class MetricDefinition(BaseModel):
    """Static catalogue entry for one reportable process-group metric."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Settings key, e.g. flowfiles_queued")
    label: str = Field(..., description="Upper-case label leading the check output")
    comment: str = Field(..., description="Text following the value in the check output")
    perf_key: str = Field(..., description="Performance-data key")
    title: str = Field(..., description="Service title appended to the group name")
    unit: UnitKind
    accessor: str = Field(
        ...,
        description="Attribute of ProcessGroupStatus holding the live value",
    )


class MetricSpec(BaseModel):
    """A MetricDefinition joined with its configured mode and thresholds."""

    model_config = ConfigDict(frozen=True)

    definition: MetricDefinition
    mode: MetricMode = MetricMode.DISABLED
    warning: Optional[Union[int, float]] = Field(None, ge=0)
    critical: Optional[Union[int, float]] = Field(None, ge=0)

    @property
    def enabled(self) -> bool:
        return self.mode is not MetricMode.DISABLED


# Declaration order is the order check results appear in every batch.
METRIC_DEFINITIONS: Tuple[MetricDefinition, ...] = (
    MetricDefinition(
        key="active_thread_count",
        label="ACTIVE THREAD COUNT",
        comment="active threads",
        perf_key="active_thread_count",
        title="NiFi Active Thread Count",
        unit=UnitKind.COUNT,
        accessor="active_thread_count",
    ),
    MetricDefinition(
        key="flowfiles_queued",
        label="FLOWFILES QUEUED",
        comment="flowfiles queued",
        perf_key="flowfiles_queued",
        title="NiFi Flowfiles Queued",
        unit=UnitKind.COUNT,
        accessor="queued_count",
    ),
    MetricDefinition(
        key="bytes_queued",
        label="BYTES QUEUED",
        comment="queued",
        perf_key="bytes_queued",
        title="NiFi Data Queued",
        unit=UnitKind.DATA_SIZE,
        accessor="queued_content_size",
    ),
    MetricDefinition(
        key="bytes_in",
        label="BYTES IN",
        comment="in",
        perf_key="bytes_in",
        title="NiFi Data In",
        unit=UnitKind.DATA_RATE,
        accessor="bytes_received",
    ),
    MetricDefinition(
        key="bytes_out",
        label="BYTES OUT",
        comment="out",
        perf_key="bytes_out",
        title="NiFi Data Out",
        unit=UnitKind.DATA_RATE,
        accessor="bytes_sent",
    ),
    MetricDefinition(
        key="flowfiles_in",
        label="FLOWFILES IN",
        comment="flowfiles in",
        perf_key="flowfiles_in",
        title="NiFi Flowfiles In",
        unit=UnitKind.COUNT,
        accessor="flowfiles_received",
    ),
    MetricDefinition(
        key="flowfiles_out",
        label="FLOWFILES OUT",
        comment="flowfiles out",
        perf_key="flowfiles_out",
        title="NiFi Flowfiles Out",
        unit=UnitKind.COUNT,
        accessor="flowfiles_sent",
    ),
    MetricDefinition(
        key="bytes_read",
        label="BYTES READ",
        comment="data read",
        perf_key="data_read",
        title="NiFi Data Read",
        unit=UnitKind.DATA_RATE,
        accessor="bytes_read",
    ),
    MetricDefinition(
        key="bytes_written",
        label="BYTES WRITTEN",
        comment="data written",
        perf_key="data_written",
        title="NiFi Data Written",
        unit=UnitKind.DATA_RATE,
        accessor="bytes_written",
    ),
)
