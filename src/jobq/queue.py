"""
Job queue.

The queue owns the broker and codec that its jobs read and write, and a
FIFO list of pending job ids that workers pop from.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .broker import Broker, create_broker
from .codec import PayloadCodec, PickleCodec, create_codec
from .config import Settings
from .errors import InvalidArgumentError
from .ids import queue_key
from .job import Job
from .logging import get_logger
from .options import JobOptions

logger = get_logger("jobq.queue")


class JobQueue:
    """Entry point for producers.

    Example:
        ```python
        queue = JobQueue(MemoryBroker(), name="reports")
        job = queue.enqueue(Task(build_report, args=(2024,)))
        print(job.wait_for_result(timeout=30))
        ```
    """

    def __init__(
        self,
        broker: Broker,
        codec: PayloadCodec | None = None,
        name: str = "default",
        *,
        poll_interval: float = 0.001,
        default_options: JobOptions | None = None,
    ):
        if not isinstance(broker, Broker):
            raise InvalidArgumentError(f"Not a broker: {type(broker).__name__}")
        if not name:
            raise InvalidArgumentError("Queue name cannot be empty")
        if poll_interval <= 0:
            raise InvalidArgumentError("poll_interval must be positive")

        self._broker = broker
        self._codec = codec if codec is not None else PickleCodec()
        self._name = name
        self._poll_interval = poll_interval
        self._default_options = default_options or JobOptions()

    @classmethod
    def from_settings(cls, settings: Settings, broker: Broker | None = None) -> JobQueue:
        """Build a queue (and, unless given, its broker) from settings."""
        qc = settings.queue
        return cls(
            broker if broker is not None else create_broker(settings.broker),
            create_codec(qc.codec, compress=qc.compress, compression_level=qc.compression_level),
            name=qc.name,
            poll_interval=qc.poll_interval,
            default_options=JobOptions(
                job_timeout=qc.job_timeout,
                ttl=qc.ttl,
                result_ttl=qc.result_ttl,
                failure_ttl=qc.failure_ttl,
            ),
        )

    def __repr__(self) -> str:
        return f"JobQueue(name={self._name!r}, broker={self._broker.name!r}, codec={self._codec.name!r})"

    @property
    def broker(self) -> Broker:
        return self._broker

    @property
    def codec(self) -> PayloadCodec:
        return self._codec

    @property
    def name(self) -> str:
        return self._name

    @property
    def poll_interval(self) -> float:
        return self._poll_interval

    @property
    def default_options(self) -> JobOptions:
        return self._default_options

    @property
    def pending_key(self) -> str:
        return queue_key(self._name)

    def enqueue(self, task: Callable[[], Any], options: JobOptions | None = None) -> Job:
        """Persist a new job and make it visible to workers."""
        opts = (options or self._default_options).copy()
        job = Job(self, task, opts)
        job.init_new_job()
        self._broker.push_to_list(self.pending_key, job.id)
        logger.debug("Job enqueued", job_id=job.id, queue=self._name)
        return job

    def dequeue_id(self) -> str | None:
        return self._broker.pop_from_list(self.pending_key)

    def fetch_job(self, job_id: str) -> Job:
        return Job.fetch(self, job_id)

    def exists(self, job_id: str) -> bool:
        return Job.exists(self, job_id)

    def is_alive(self, job_id: str) -> bool:
        return Job.is_alive(self, job_id)


__all__ = ["JobQueue"]
