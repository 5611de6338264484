"""Minimal worker loop: pop a job id, restore the job, perform it."""

from __future__ import annotations

import os
import socket
import threading
import time
import uuid

from .errors import CodecError
from .job import Job
from .logging import get_logger, timed
from .options import JobOptions
from .queue import JobQueue
from .status import JobStatus

logger = get_logger("jobq.worker")


def default_worker_id() -> str:
    return f"{socket.gethostname()}.{os.getpid()}.{uuid.uuid4().hex[:6]}"


class Worker:
    """
    Runs queued jobs one at a time on the calling thread.

    Run several workers (threads or processes) for concurrency. Failed jobs
    are recorded as FAILURE by `Job.perform` and never retried here.
    """

    def __init__(
        self,
        queue: JobQueue,
        worker_id: str | None = None,
        poll_interval: float = 1.0,
    ) -> None:
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        self.queue = queue
        self.worker_id = worker_id or default_worker_id()
        self.poll_interval = poll_interval

    def work_one(self) -> Job | None:
        """
        Perform the next pending job.

        Returns:
            The performed job, or None if nothing runnable was pending.
        """
        while True:
            job_id = self.queue.dequeue_id()
            if job_id is None:
                return None
            if Job.is_alive(self.queue, job_id):
                break
            logger.info("Skipping job that is no longer alive", job_id=job_id, worker_id=self.worker_id)

        job = Job(self.queue, options=JobOptions(job_id=job_id))
        with logger.job_context(job_id=job.id, queue=self.queue.name, worker_id=self.worker_id):
            job.assign_worker(self.worker_id)
            try:
                job.restore_from_broker()
            except CodecError as exc:
                logger.log_error(exc, "Cannot restore job payload")
                job.record_failure(exc.message)
                return job
            if job.task is None:
                logger.warning("Job has no task payload")
                job.record_failure("Job has no task payload")
                return job
            job.set_status(JobStatus.STARTED)
            logger.info("Job started", description=job.description)
            with timed() as timer:
                job.perform()
            logger.info("Job finished", status=job.get_status().value, duration_ms=round(timer.elapsed_ms, 3))
        return job

    def work(self, burst: bool = False, stop_event: threading.Event | None = None) -> int:
        """
        Loop over pending jobs.

        Args:
            burst: Return as soon as the queue is empty
            stop_event: Return when set (checked between jobs)

        Returns:
            Number of jobs performed
        """
        performed = 0
        logger.info("Worker started", worker_id=self.worker_id, queue=self.queue.name, burst=burst)
        while stop_event is None or not stop_event.is_set():
            job = self.work_one()
            if job is not None:
                performed += 1
                continue
            if burst:
                break
            if stop_event is not None:
                stop_event.wait(self.poll_interval)
            else:
                time.sleep(self.poll_interval)
        logger.info("Worker stopped", worker_id=self.worker_id, performed=performed)
        return performed


__all__ = ["Worker", "default_worker_id"]
