from typing import List

from pydantic import BaseModel, Field


class ProcessGroupStatus(BaseModel):
    """
    Point-in-time status of one process group and, recursively, its children.

    Transfer and disk counters cover the engine's last sampling window
    (five minutes by default).
    """

    name: str = Field(..., description="Display name of the process group")
    active_thread_count: int = Field(0, ge=0, description="Number of active threads")
    queued_count: int = Field(0, ge=0, description="Number of flowfiles queued")
    queued_content_size: int = Field(0, ge=0, description="Bytes queued")
    bytes_received: int = Field(
        0,
        ge=0,
        description="Bytes received via Site-to-Site in the last window",
    )
    bytes_sent: int = Field(
        0,
        ge=0,
        description="Bytes pulled from output ports via Site-to-Site in the last window",
    )
    flowfiles_received: int = Field(
        0,
        ge=0,
        description="Flowfiles received via Site-to-Site in the last window",
    )
    flowfiles_sent: int = Field(
        0,
        ge=0,
        description="Flowfiles pulled from output ports via Site-to-Site in the last window",
    )
    bytes_read: int = Field(0, ge=0, description="Bytes read from disk in the last window")
    bytes_written: int = Field(0, ge=0, description="Bytes written to disk in the last window")
    process_group_status: List["ProcessGroupStatus"] = Field(
        default_factory=list,
        description="Child process groups, in the order reported by the engine",
    )
