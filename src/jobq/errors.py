"""
Exceptions raised by jobq.

Every error carries an `ErrorCode`, a retryable flag and an `ErrorContext`
naming the job, queue, worker, broker key or operation involved. Several
also subclass the builtin a caller would naturally catch (`ValueError`,
`TimeoutError`, `NotImplementedError`).
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    INVALID_ARGUMENT = "jobq.invalid_argument"
    ILLEGAL_STATE = "jobq.illegal_state"
    TIMEOUT = "jobq.timeout"
    REMOTE_EXECUTION = "jobq.remote_execution"
    UNSUPPORTED = "jobq.unsupported"
    BROKER = "jobq.broker"
    BROKER_UNAVAILABLE = "jobq.broker_unavailable"
    CODEC = "jobq.codec"
    CONFIG = "jobq.config"
    INTERNAL = "jobq.internal"


@dataclass
class ErrorContext:
    """Where an error happened. Unset fields are left out of `to_dict`."""

    job_id: str | None = None
    queue: str | None = None
    worker_id: str | None = None
    key: str | None = None
    status: str | None = None
    operation: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        out = {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "extra" and getattr(self, f.name) is not None
        }
        out.update(self.extra)
        return out


class JobQueueError(Exception):
    """
    Base class of all jobq errors.

    Attributes:
        message: Human-readable text, without the code prefix
        code: `ErrorCode`, class default unless overridden
        retryable: Whether repeating the call may succeed
        context: `ErrorContext`
        cause: Underlying exception, if any
    """

    code: ErrorCode = ErrorCode.INTERNAL
    retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or type(self).code
        self.retryable = type(self).retryable if retryable is None else retryable
        self.context = context if context is not None else ErrorContext()
        self.cause = cause

    def __str__(self) -> str:
        text = f"{self.message} [{self.code.value}]"
        if self.context.job_id:
            text += f" job={self.context.job_id}"
        return text

    def to_dict(self) -> dict[str, Any]:
        return {
            "error_type": type(self).__name__,
            "code": self.code.value,
            "message": self.message,
            "retryable": self.retryable,
            "context": self.context.to_dict(),
            "cause": repr(self.cause) if self.cause is not None else None,
        }


class InvalidArgumentError(JobQueueError, ValueError):
    """Rejected input: job id length, status value, option value, queue argument."""

    code = ErrorCode.INVALID_ARGUMENT


class IllegalStateError(JobQueueError):
    """The job's stored status does not allow the operation (e.g. result of a QUEUED job)."""

    code = ErrorCode.ILLEGAL_STATE


class JobTimeoutError(JobQueueError, TimeoutError):
    """No result appeared within the wait timeout. The job itself may still finish."""

    code = ErrorCode.TIMEOUT
    retryable = True

    def __init__(self, message: str = "Timed out waiting for job result", *, timeout: float | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.timeout = timeout


class RemoteExecutionError(JobQueueError):
    """
    A task failed on a worker.

    Returned by `Job.get_error`, not raised. Only the failure's message text
    crosses the broker, so the exception type and traceback are lost.
    """

    code = ErrorCode.REMOTE_EXECUTION

    def __init__(self, message: str | None = None, **kwargs):
        super().__init__(message or "", **kwargs)


class UnsupportedOperationError(JobQueueError, NotImplementedError):
    code = ErrorCode.UNSUPPORTED


class BrokerError(JobQueueError):
    """A broker command failed."""

    code = ErrorCode.BROKER


class BrokerConnectionError(BrokerError):
    """The broker could not be reached or timed out."""

    code = ErrorCode.BROKER_UNAVAILABLE
    retryable = True


class CodecError(JobQueueError):
    """A task or result payload could not be encoded or decoded."""

    code = ErrorCode.CODEC


class ConfigError(JobQueueError):
    code = ErrorCode.CONFIG


class InvalidConfigError(ConfigError, ValueError):
    """A configuration file failed schema validation."""


def is_retryable(error: BaseException) -> bool:
    """jobq errors answer for themselves; builtin connection and timeout errors count as retryable."""
    if isinstance(error, JobQueueError):
        return error.retryable
    return isinstance(error, (ConnectionError, TimeoutError))


__all__ = [
    "ErrorCode",
    "ErrorContext",
    "JobQueueError",
    "InvalidArgumentError",
    "IllegalStateError",
    "JobTimeoutError",
    "RemoteExecutionError",
    "UnsupportedOperationError",
    "BrokerError",
    "BrokerConnectionError",
    "CodecError",
    "ConfigError",
    "InvalidConfigError",
    "is_retryable",
]
