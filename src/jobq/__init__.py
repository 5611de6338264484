"""
jobq - broker-backed job records for a distributed task queue.

A job's status, payload and result are stored as fields of a map in a
shared key-value broker (in-memory or Redis). Producers enqueue jobs,
workers restore and perform them, and callers poll for completion.

Example:
    ```python
    from jobq import JobQueue, MemoryBroker, Task, Worker

    queue = JobQueue(MemoryBroker())
    job = queue.enqueue(Task(str.upper, args=("hello",)))

    Worker(queue).work(burst=True)
    print(job.wait_for_result(timeout=1.0))  # HELLO
    ```
"""

from .broker import BaseBroker, Broker, MemoryBroker, RedisBroker, create_broker
from .codec import BaseCodec, JsonCodec, PayloadCodec, PickleCodec, create_codec
from .config import (
    BrokerConfig,
    LoggingConfig,
    QueueConfig,
    Settings,
    WorkerConfig,
    configure,
    get_settings,
    load_env,
)
from .errors import (
    BrokerConnectionError,
    BrokerError,
    CodecError,
    ConfigError,
    ErrorCode,
    ErrorContext,
    IllegalStateError,
    InvalidArgumentError,
    InvalidConfigError,
    JobQueueError,
    JobTimeoutError,
    RemoteExecutionError,
    UnsupportedOperationError,
    is_retryable,
)
from .ids import JOB_KEY_PREFIX, generate_job_id, job_key, validate_job_id
from .job import Job
from .logging import configure_logging, get_logger
from .options import JobOptions
from .queue import JobQueue
from .status import JobStatus
from .task import Task
from .worker import Worker

__version__ = "0.1.0"

__all__ = [
    # Core
    "Job",
    "JobStatus",
    "JobOptions",
    "JobQueue",
    "Task",
    "Worker",
    # Identifiers
    "JOB_KEY_PREFIX",
    "generate_job_id",
    "job_key",
    "validate_job_id",
    # Brokers
    "Broker",
    "BaseBroker",
    "MemoryBroker",
    "RedisBroker",
    "create_broker",
    # Codecs
    "PayloadCodec",
    "BaseCodec",
    "PickleCodec",
    "JsonCodec",
    "create_codec",
    # Config
    "Settings",
    "BrokerConfig",
    "QueueConfig",
    "WorkerConfig",
    "LoggingConfig",
    "get_settings",
    "configure",
    "load_env",
    # Logging
    "get_logger",
    "configure_logging",
    # Errors
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
