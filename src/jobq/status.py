"""
Job status for the broker-backed job record.

The status field is the single source of truth for a job's lifecycle
stage. Its wire value is the upper-case member name.

State transitions:
- (new) -> QUEUED (init_new_job)
- QUEUED -> STARTED (worker picks the job up)
- STARTED -> SUCCESS | FAILURE (perform)
- * -> DELETED (delete)

CANCELLED is reserved; nothing in jobq transitions into it.
"""

from __future__ import annotations

from enum import Enum


class JobStatus(str, Enum):
    """Job lifecycle states."""

    QUEUED = "QUEUED"
    STARTED = "STARTED"
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    CANCELLED = "CANCELLED"
    DELETED = "DELETED"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: str | None) -> JobStatus:
        """Decode a status field; absent or unrecognised text is UNKNOWN."""
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_terminal(self) -> bool:
        """Check if this is a terminal state."""
        return self in _TERMINAL

    @property
    def is_active(self) -> bool:
        """Check if the job is still waiting or running."""
        return self in {JobStatus.QUEUED, JobStatus.STARTED}

    @property
    def timestamp_field(self) -> str | None:
        """Broker field stamped when a job enters this status."""
        return _TIMESTAMP_FIELDS.get(self)


_TERMINAL = frozenset(
    {
        JobStatus.SUCCESS,
        JobStatus.FAILURE,
        JobStatus.CANCELLED,
        JobStatus.DELETED,
    }
)

_TIMESTAMP_FIELDS: dict[JobStatus, str] = {
    JobStatus.QUEUED: "queued_at",
    JobStatus.STARTED: "started_at",
    JobStatus.SUCCESS: "finished_at",
    JobStatus.FAILURE: "finished_at",
}


__all__ = ["JobStatus"]
