from __future__ import annotations

import uuid

from .errors import ErrorContext, InvalidArgumentError

JOB_KEY_PREFIX = "jq:job:"
QUEUE_KEY_PREFIX = "jq:queue:"

MIN_JOB_ID_LENGTH = 4
MAX_JOB_ID_LENGTH = 128


def generate_job_id() -> str:
    return str(uuid.uuid4())


def validate_job_id(job_id: str) -> str:
    """Return job_id unchanged if its length is within bounds."""
    if not isinstance(job_id, str):
        raise InvalidArgumentError(f"Job ID must be a string, got {type(job_id).__name__}")
    if not MIN_JOB_ID_LENGTH <= len(job_id) <= MAX_JOB_ID_LENGTH:
        raise InvalidArgumentError(
            f"Job ID length must be between {MIN_JOB_ID_LENGTH} to {MAX_JOB_ID_LENGTH} characters",
            context=ErrorContext(job_id=job_id, operation="validate_job_id"),
        )
    return job_id


def job_key(job_id: str) -> str:
    return f"{JOB_KEY_PREFIX}{job_id}"


def queue_key(name: str) -> str:
    return f"{QUEUE_KEY_PREFIX}{name}"


__all__ = [
    "JOB_KEY_PREFIX",
    "QUEUE_KEY_PREFIX",
    "MIN_JOB_ID_LENGTH",
    "MAX_JOB_ID_LENGTH",
    "generate_job_id",
    "validate_job_id",
    "job_key",
    "queue_key",
]
