"""
Job options.

Options are persisted as text fields next to the job and restored by
workers. Durations are metadata only: the job record never enforces them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from .errors import InvalidArgumentError

FIELD_DESCRIPTION = "description"
FIELD_TIMEOUT = "timeout"
FIELD_TTL = "ttl"
FIELD_RESULT_TTL = "result_ttl"
FIELD_FAILURE_TTL = "fail_ttl"

# option attribute -> broker field, for the integer options
_NUMERIC_FIELDS: dict[str, str] = {
    "job_timeout": FIELD_TIMEOUT,
    "ttl": FIELD_TTL,
    "result_ttl": FIELD_RESULT_TTL,
    "failure_ttl": FIELD_FAILURE_TTL,
}


@dataclass
class JobOptions:
    """Per-job configuration.

    Attributes:
        description: Free text shown to operators
        job_id: Explicit job identifier (4-128 chars); generated when None
        job_timeout: Maximum execution time in seconds
        ttl: Record lifetime in seconds; -1 keeps it forever
        result_ttl: Result retention after success, in seconds
        failure_ttl: Error retention after failure, in seconds
    """

    description: str | None = None
    job_id: str | None = None
    job_timeout: int = 180
    ttl: int = -1
    result_ttl: int = 500
    failure_ttl: int = 31_536_000

    def __post_init__(self):
        if self.job_timeout <= 0:
            raise InvalidArgumentError("job_timeout must be positive")

    def copy(self, **changes: Any) -> JobOptions:
        return replace(self, **changes)

    def to_fields(self) -> dict[str, str | None]:
        """Render the options as broker field values."""
        fields: dict[str, str | None] = {FIELD_DESCRIPTION: self.description}
        for attr, name in _NUMERIC_FIELDS.items():
            fields[name] = str(getattr(self, attr))
        return fields

    def update_from_fields(self, fields: Mapping[str, str]) -> list[str]:
        """
        Best-effort restore from broker fields.

        A missing or non-integer field leaves the current value in place.
        Returns the names of the fields that could not be restored.
        """
        skipped: list[str] = []
        if FIELD_DESCRIPTION in fields:
            self.description = fields[FIELD_DESCRIPTION]
        for attr, name in _NUMERIC_FIELDS.items():
            try:
                setattr(self, attr, int(fields[name]))
            except (KeyError, TypeError, ValueError):
                skipped.append(name)
        return skipped


__all__ = [
    "JobOptions",
    "FIELD_DESCRIPTION",
    "FIELD_TIMEOUT",
    "FIELD_TTL",
    "FIELD_RESULT_TTL",
    "FIELD_FAILURE_TTL",
]
