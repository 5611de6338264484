"""
Broker-backed job record.

A `Job` holds no lifecycle state of its own. Status, timestamps, payloads
and options live as string fields in a broker map keyed by
``jq:job:<id>``; every accessor reads the broker and every transition
writes it. Producer, worker and waiting client each hold their own `Job`
for the same key, so the broker is the only shared state.

Writes are field-level and independent:
- `set_status` writes the timestamp field, then the status field.
- `init_new_job` writes the option/task fields in one batch, then the status.
A concurrent reader can observe either half without the other.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING, Any

from .errors import (
    CodecError,
    ErrorContext,
    IllegalStateError,
    InvalidArgumentError,
    JobTimeoutError,
    RemoteExecutionError,
    UnsupportedOperationError,
)
from .ids import generate_job_id, job_key, validate_job_id
from .logging import get_logger
from .options import JobOptions
from .status import JobStatus
from .timeutil import now_iso, parse_iso

if TYPE_CHECKING:
    from .broker import Broker
    from .codec import PayloadCodec
    from .queue import JobQueue

FIELD_STATUS = "status"
FIELD_QUEUED_AT = "queued_at"
FIELD_STARTED_AT = "started_at"
FIELD_FINISHED_AT = "finished_at"
FIELD_RESULT = "result"
FIELD_ERROR = "error"
FIELD_TASK = "task"
FIELD_WORKER_ID = "worker"

logger = get_logger("jobq.job")


class Job:
    """A typed view over one job's broker fields.

    Example:
        ```python
        queue = JobQueue(MemoryBroker())
        job = Job(queue, Task(render_report, args=(42,)), JobOptions(description="report"))
        job.init_new_job()

        # elsewhere, on a worker
        job = Job.fetch(queue, job_id)
        job.set_status(JobStatus.STARTED)
        job.perform()
        ```
    """

    def __init__(
        self,
        queue: JobQueue,
        task: Callable[[], Any] | None = None,
        options: JobOptions | None = None,
    ):
        from .queue import JobQueue

        if not isinstance(queue, JobQueue):
            raise InvalidArgumentError(
                f"Queue argument must be an instance of JobQueue, got {type(queue).__name__}"
            )

        self._queue = queue
        self._broker: Broker = queue.broker
        self._codec: PayloadCodec = queue.codec
        self._task = task
        self._options = options if options is not None else JobOptions()

        if self._options.job_id is not None:
            self._id = validate_job_id(self._options.job_id)
        else:
            self._id = generate_job_id()
        self._key = job_key(self._id)

        logger.debug("Job created", job_id=self._id, queue=queue.name)

    def __repr__(self) -> str:
        return f"Job(id={self._id!r}, queue={self._queue.name!r})"

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    @property
    def key(self) -> str:
        return self._key

    @property
    def queue(self) -> JobQueue:
        return self._queue

    @property
    def origin(self) -> str:
        """Name of the queue the job belongs to."""
        return self._queue.name

    @property
    def options(self) -> JobOptions:
        return self._options

    @property
    def description(self) -> str | None:
        return self._options.description

    @property
    def task(self) -> Callable[[], Any] | None:
        return self._task

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get_status(self) -> JobStatus:
        return JobStatus.parse(self._get_field(FIELD_STATUS))

    def get_enqueued_at(self) -> datetime | None:
        return parse_iso(self._get_field(FIELD_QUEUED_AT))

    def get_started_at(self) -> datetime | None:
        return parse_iso(self._get_field(FIELD_STARTED_AT))

    def get_finished_at(self) -> datetime | None:
        return parse_iso(self._get_field(FIELD_FINISHED_AT))

    def get_worker_id(self) -> str | None:
        return self._get_field(FIELD_WORKER_ID)

    def get_error(self) -> RemoteExecutionError:
        """
        Return (not raise) the failure recorded by the worker.

        Raises:
            IllegalStateError: If the job has not reached a terminal status
        """
        self._require_terminal("get_error")
        return RemoteExecutionError(
            self._get_field(FIELD_ERROR),
            context=ErrorContext(job_id=self._id, queue=self.origin, worker_id=self.get_worker_id()),
        )

    def get_result(self) -> Any:
        """
        Decode the stored result; None if the job finished without one.

        Raises:
            IllegalStateError: If the job has not reached a terminal status
        """
        self._require_terminal("get_result")
        value = self._get_field(FIELD_RESULT)
        if value is None:
            return None
        return self._codec.decode_from_text(value)

    def is_started(self) -> bool:
        return self.get_status() == JobStatus.STARTED

    def is_done(self) -> bool:
        return self.get_status() in (JobStatus.SUCCESS, JobStatus.FAILURE, JobStatus.CANCELLED)

    def is_cancelled(self) -> bool:
        return self.get_status() == JobStatus.CANCELLED

    def is_success(self) -> bool:
        return self.get_status() == JobStatus.SUCCESS

    def is_failure(self) -> bool:
        return self.get_status() == JobStatus.FAILURE

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def init_new_job(self) -> None:
        """Persist options and task, then mark the job QUEUED."""
        if self._task is None:
            raise IllegalStateError(
                "Cannot initialise a job without a task",
                context=ErrorContext(job_id=self._id, operation="init_new_job"),
            )
        fields = self._options.to_fields()
        fields[FIELD_TASK] = self._codec.encode_to_text(self._task)

        self._set_batch_fields(fields)
        self.set_status(JobStatus.QUEUED)

    def restore_from_broker(self) -> None:
        """
        Rebuild options and task from the broker fields.

        Best effort: numeric fields that are missing or unparseable keep
        their current values and do not fail the restore.
        """
        fields = self._get_batch_fields()
        skipped = self._options.update_from_fields(fields)
        if skipped and fields:
            logger.debug("Options partially restored", job_id=self._id, skipped=skipped)

        serialized = fields.get(FIELD_TASK)
        if serialized is not None:
            self._task = self._codec.decode_from_text(serialized)

    def set_status(self, status: JobStatus) -> None:
        """Stamp the status timestamp field, then write the status field."""
        requested = status
        try:
            status = JobStatus(status)
        except ValueError:
            status = JobStatus.UNKNOWN
        if status == JobStatus.UNKNOWN:
            raise InvalidArgumentError(
                f"Not a persistable status: {requested!r}",
                context=ErrorContext(job_id=self._id, operation="set_status"),
            )
        ts_field = status.timestamp_field
        if ts_field is not None:
            self._set_field(ts_field, now_iso())
        self._set_field(FIELD_STATUS, status.value)
        logger.log_transition(self._id, status.value)

    def assign_worker(self, worker_id: str) -> None:
        self._set_field(FIELD_WORKER_ID, worker_id)

    def perform(self) -> Any:
        """
        Run the task on the calling thread and record the outcome.

        On success the encoded return value is stored, the job becomes
        SUCCESS and the value is returned. If the task raises, only the
        message text is stored, the job becomes FAILURE and None is
        returned; the exception does not propagate. A return value the codec
        cannot encode is recorded the same way.
        """
        if self._task is None:
            raise IllegalStateError(
                "Job has no task to perform",
                context=ErrorContext(job_id=self._id, operation="perform"),
            )
        try:
            result = self._task()
        except Exception as exc:
            logger.log_error(exc, f"Job {self._id} failed", level=logging.WARNING, job_id=self._id)
            self.record_failure(str(exc) or type(exc).__name__)
            return None

        try:
            encoded = self._codec.encode_to_text(result)
        except CodecError as exc:
            logger.log_error(exc, f"Job {self._id} result not storable", level=logging.WARNING, job_id=self._id)
            self.record_failure(exc.message)
            return None

        self._set_field(FIELD_RESULT, encoded)
        self.set_status(JobStatus.SUCCESS)
        return result

    def record_failure(self, message: str) -> None:
        """Store a failure message and mark the job FAILURE."""
        self._set_field(FIELD_ERROR, message)
        self.set_status(JobStatus.FAILURE)

    def wait_for_result(self, timeout: float, poll_interval: float | None = None) -> Any:
        """
        Block until a result is stored, then decode and return it.

        Args:
            timeout: Seconds to wait. 0 (or less) checks exactly once.
            poll_interval: Seconds between checks; defaults to the queue's.

        Raises:
            JobTimeoutError: If no result appeared within `timeout`
        """
        interval = poll_interval if poll_interval is not None else self._queue.poll_interval
        started = time.monotonic()
        while True:
            value = self._get_field(FIELD_RESULT)
            if value is not None:
                return self._codec.decode_from_text(value)

            elapsed = time.monotonic() - started
            if timeout <= 0 or elapsed >= timeout:
                break
            time.sleep(min(interval, timeout - elapsed))

        logger.debug("Timed out waiting for result", job_id=self._id, timeout=timeout)
        raise JobTimeoutError(
            f"No result for job {self._id} after {timeout}s",
            timeout=timeout,
            context=ErrorContext(job_id=self._id, queue=self.origin, operation="wait_for_result"),
        )

    def delete(self) -> None:
        """
        Remove the job's map, then record DELETED.

        The status write recreates a map holding only ``status=DELETED`` so
        later lookups see a present-but-dead job.
        """
        self._broker.remove_map(self._key)
        self.set_status(JobStatus.DELETED)

    def cancel(self) -> bool:
        raise UnsupportedOperationError(
            "Job cancellation is not supported",
            context=ErrorContext(job_id=self._id, operation="cancel"),
        )

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------

    @classmethod
    def fetch(cls, queue: JobQueue, job_id: str) -> Job:
        """Build a job handle from its id and restore it from the broker."""
        job = cls(queue, options=JobOptions(job_id=job_id))
        job.restore_from_broker()
        return job

    @staticmethod
    def exists(queue: JobQueue, job_id: str) -> bool:
        return _stored_status(queue, job_id) != JobStatus.UNKNOWN

    @staticmethod
    def is_alive(queue: JobQueue, job_id: str) -> bool:
        return _stored_status(queue, job_id) not in (JobStatus.UNKNOWN, JobStatus.DELETED)

    # ------------------------------------------------------------------
    # Broker access
    # ------------------------------------------------------------------

    def _require_terminal(self, operation: str) -> None:
        status = self.get_status()
        if not status.is_terminal:
            raise IllegalStateError(
                f"Job is not finished (status={status.value})",
                context=ErrorContext(job_id=self._id, operation=operation),
            )

    def _get_field(self, field: str) -> str | None:
        return self._broker.get_field(self._key, field)

    def _set_field(self, field: str, value: str) -> None:
        self._broker.put_field(self._key, field, value)

    def _get_batch_fields(self) -> dict[str, str]:
        return self._broker.get_all_fields(self._key)

    def _set_batch_fields(self, fields: dict[str, str | None]) -> None:
        self._broker.put_all_fields(self._key, fields)


def _stored_status(queue: JobQueue, job_id: str) -> JobStatus:
    key = job_key(validate_job_id(job_id))
    return JobStatus.parse(queue.broker.get_field(key, FIELD_STATUS))


__all__ = [
    "Job",
    "FIELD_STATUS",
    "FIELD_QUEUED_AT",
    "FIELD_STARTED_AT",
    "FIELD_FINISHED_AT",
    "FIELD_RESULT",
    "FIELD_ERROR",
    "FIELD_TASK",
    "FIELD_WORKER_ID",
]
