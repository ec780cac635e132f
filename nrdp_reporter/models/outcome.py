from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    RECEIVER_REJECTED = "receiver_rejected"
    TRANSPORT_ERROR = "transport_error"


class SubmissionOutcome(BaseModel):
    """Result of one HTTP round trip to the NRDP receiver."""

    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind
    message: Optional[str] = Field(
        None,
        description="Message reported by the receiver when it rejected the batch.",
    )
    status_code: Optional[int] = Field(
        None,
        description="HTTP status code when the receiver did not answer with 200.",
    )
    cause: Optional[str] = Field(
        None,
        description="Network, encoding or response-parsing failure.",
    )

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @classmethod
    def success(cls) -> "SubmissionOutcome":
        return cls(kind=OutcomeKind.SUCCESS)

    @classmethod
    def rejected(cls, message: str) -> "SubmissionOutcome":
        return cls(kind=OutcomeKind.RECEIVER_REJECTED, message=message)

    @classmethod
    def transport_error(
        cls,
        status_code: Optional[int] = None,
        cause: Optional[str] = None,
    ) -> "SubmissionOutcome":
        return cls(kind=OutcomeKind.TRANSPORT_ERROR, status_code=status_code, cause=cause)


class GroupReport(BaseModel):
    """What happened to one process group's batch during a reporting cycle."""

    group_name: str
    batch_size: int = Field(0, ge=0, description="Number of check results built for the group")
    outcome: Optional[SubmissionOutcome] = Field(
        None,
        description="Receiver outcome; None if the batch never left the reporter.",
    )
    error: Optional[str] = Field(
        None,
        description="Local failure (host name resolution or payload encoding) that aborted the submission.",
    )

    @property
    def ok(self) -> bool:
        return self.error is None and self.outcome is not None and self.outcome.ok
