from enum import IntEnum
from typing import Iterator, List

from pydantic import BaseModel, ConfigDict, Field


class Severity(IntEnum):
    """Nagios service state; the integer value is what goes on the wire."""

    OK = 0
    WARNING = 1
    CRITICAL = 2

    @property
    def word(self) -> str:
        return _SEVERITY_WORDS[self]


_SEVERITY_WORDS = {
    Severity.OK: "OK",
    Severity.WARNING: "WARN",
    Severity.CRITICAL: "CRIT",
}


class Verdict(BaseModel):
    """Outcome of evaluating one metric value against its thresholds."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    message: str = Field(..., description="e.g. 'FLOWFILES QUEUED WARN - 150 flowfiles queued'")
    performance: str = Field(..., description="Performance token, e.g. 'flowfiles_queued=150'")


class CheckResult(BaseModel):
    """A Verdict bound to the Nagios service and host it is reported for."""

    model_config = ConfigDict(frozen=True)

    service_name: str
    host_name: str
    verdict: Verdict
    include_performance_data: bool = True

    @property
    def state(self) -> int:
        return int(self.verdict.severity)

    @property
    def output(self) -> str:
        if self.include_performance_data:
            return f"{self.verdict.message} | {self.verdict.performance}"
        return self.verdict.message


class CheckResultBatch:
    """Ordered check results for one process group in one reporting cycle."""

    def __init__(self) -> None:
        self._results: List[CheckResult] = []

    def append(
        self,
        service_name: str,
        host_name: str,
        verdict: Verdict,
        include_performance_data: bool,
    ) -> CheckResult:
        result = CheckResult(
            service_name=service_name,
            host_name=host_name,
            verdict=verdict,
            include_performance_data=include_performance_data,
        )
        self._results.append(result)
        return result

    def __iter__(self) -> Iterator[CheckResult]:
        return iter(self._results)

    def __len__(self) -> int:
        return len(self._results)
