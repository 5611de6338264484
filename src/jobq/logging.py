"""
Structured logging for jobq.

Records carry a message plus a dict of fields (job id, queue, worker id,
status, error details). Fields travel on the `LogRecord` as ``fields`` and
are rendered by `JSONFormatter` (one JSON object per line) or
`TextFormatter` (``key=value`` pairs).

The active job context lives in a `ContextVar`, so a worker thread that
enters `job_context` only tags its own records.
"""

from __future__ import annotations

import logging
import sys
import time
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, fields, replace
from datetime import datetime, timezone
from typing import Any

import orjson

from .errors import JobQueueError

MAX_FIELD_CHARS = 500


@dataclass(frozen=True)
class LogContext:
    """Job correlation fields added to every record."""

    trace_id: str | None = None
    job_id: str | None = None
    queue: str | None = None
    worker_id: str | None = None
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

    def with_update(self, **kwargs) -> LogContext:
        """Copy with some fields replaced; ``extra`` is merged, not replaced."""
        extra = {**self.extra, **kwargs.pop("extra", {})}
        return replace(self, extra=extra, **kwargs)


_current: ContextVar[LogContext] = ContextVar("jobq_log_context", default=LogContext())


def current_context() -> LogContext:
    return _current.get()


class StructuredLogger:
    """
    Thin wrapper over a stdlib logger that attaches job fields.

    Example:
        ```python
        logger = get_logger("jobq.worker")

        with logger.job_context(job_id=job.id, queue=queue.name):
            logger.info("Job started", description=job.description)
        ```
    """

    def __init__(self, name: str = "jobq", level: str = "INFO", json_output: bool = True):
        self.name = name
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level.upper())
        self.json_output = json_output

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def context(self) -> LogContext:
        return _current.get()

    @contextmanager
    def job_context(self, trace_id: str | None = None, **kwargs) -> Iterator[str]:
        """
        Tag records emitted inside the block with job fields.

        Yields:
            The trace ID (generated when not given)
        """
        trace_id = trace_id or f"trace_{uuid.uuid4().hex[:16]}"
        token = _current.set(_current.get().with_update(trace_id=trace_id, **kwargs))
        try:
            yield trace_id
        finally:
            _current.reset(token)

    def _emit(self, level: int, message: str, fields: dict[str, Any], exc_info: Any = None) -> None:
        if not self._logger.isEnabledFor(level):
            return
        payload = {**_current.get().to_dict(), **fields}
        self._logger.log(level, message, extra={"fields": payload}, exc_info=exc_info)

    def debug(self, message: str, **fields) -> None:
        self._emit(logging.DEBUG, message, fields)

    def info(self, message: str, **fields) -> None:
        self._emit(logging.INFO, message, fields)

    def warning(self, message: str, **fields) -> None:
        self._emit(logging.WARNING, message, fields)

    def error(self, message: str, **fields) -> None:
        self._emit(logging.ERROR, message, fields)

    def log_transition(self, job_id: str, status: str) -> None:
        self._emit(logging.DEBUG, f"Job {job_id} -> {status}", {"event": "transition", "job_id": job_id, "status": status})

    def log_error(self, error: BaseException, message: str | None = None, level: int = logging.ERROR, **fields) -> None:
        """Log an exception's type and text; library errors add code and retryability."""
        details: dict[str, Any] = {
            "event": "error",
            "error_type": type(error).__name__,
            "error_message": clip(str(error)),
        }
        if isinstance(error, JobQueueError):
            details["error_code"] = error.code.value
            details["retryable"] = error.retryable
        details.update(fields)
        self._emit(level, message or f"Error: {error}", details)


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        data.update(getattr(record, "fields", {}))
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return orjson.dumps(data, default=str).decode("utf-8")


class TextFormatter(logging.Formatter):
    """``HH:MM:SS.mmm LEVEL logger message key=value ...``"""

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created, timezone.utc).strftime("%H:%M:%S.%f")[:-3]
        pairs = " ".join(f"{k}={v}" for k, v in getattr(record, "fields", {}).items())
        line = f"{stamp} {record.levelname:<8} {record.name} {record.getMessage()}"
        return f"{line} {pairs}" if pairs else line


def clip(text: str, limit: int = MAX_FIELD_CHARS) -> str:
    """Shorten long field values (task error messages can be large)."""
    if len(text) <= limit:
        return text
    return f"{text[:limit]}... ({len(text)} chars)"


@dataclass
class Timer:
    """Wall-clock stopwatch on `time.monotonic`."""

    started: float = field(default_factory=time.monotonic)
    stopped: float | None = None

    def stop(self) -> float:
        self.stopped = time.monotonic()
        return self.elapsed_ms

    @property
    def elapsed_ms(self) -> float:
        end = self.stopped if self.stopped is not None else time.monotonic()
        return (end - self.started) * 1000


@contextmanager
def timed() -> Iterator[Timer]:
    timer = Timer()
    try:
        yield timer
    finally:
        timer.stop()


_loggers: dict[str, StructuredLogger] = {}
_defaults: dict[str, Any] = {"level": "INFO", "json_output": True}
_handler: logging.Handler | None = None


def get_logger(name: str = "jobq") -> StructuredLogger:
    """Return the cached logger for `name`, creating it with current defaults."""
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name, **_defaults)
    return _loggers[name]


def configure_logging(level: str = "INFO", json_output: bool = True) -> StructuredLogger:
    """
    Apply level and output format to every jobq logger, present and future.

    Records are written to stdout by one handler on the ``jobq`` package
    logger; child loggers propagate to it. Until this is called, jobq adds
    no handlers and records go wherever the application routes them.
    """
    global _handler
    _defaults.update(level=level, json_output=json_output)
    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        logging.getLogger("jobq").addHandler(_handler)
    _handler.setFormatter(JSONFormatter() if json_output else TextFormatter())
    for logger in _loggers.values():
        logger.logger.setLevel(level.upper())
        logger.json_output = json_output
    return get_logger("jobq")


__all__ = [
    "LogContext",
    "StructuredLogger",
    "JSONFormatter",
    "TextFormatter",
    "Timer",
    "timed",
    "clip",
    "current_context",
    "get_logger",
    "configure_logging",
]
