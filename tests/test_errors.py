"""
Tests for the error taxonomy.
"""

import pytest

from jobq.errors import (
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


class TestErrorContext:
    """Test error context."""

    def test_to_dict_skips_unset(self):
        ctx = ErrorContext(job_id="job-0001", key="jq:job:job-0001", extra={"attempt": 2})

        assert ctx.to_dict() == {"job_id": "job-0001", "key": "jq:job:job-0001", "attempt": 2}

    def test_empty(self):
        assert ErrorContext().to_dict() == {}


class TestJobQueueError:
    """Test the base error."""

    def test_defaults(self):
        error = JobQueueError("Something went wrong")

        assert error.message == "Something went wrong"
        assert error.code == ErrorCode.INTERNAL
        assert not error.retryable
        assert error.cause is None
        assert error.context == ErrorContext()

    def test_str_includes_code_and_job(self):
        error = IllegalStateError("Job is not finished", context=ErrorContext(job_id="job-0001"))

        assert str(error) == "Job is not finished [jobq.illegal_state] job=job-0001"

    def test_overrides_do_not_leak(self):
        """Test per-instance overrides leave the class defaults alone."""
        error = BrokerError("x", code=ErrorCode.INTERNAL, retryable=True)

        assert error.code == ErrorCode.INTERNAL
        assert error.retryable
        assert BrokerError("y").code == ErrorCode.BROKER
        assert not BrokerError("y").retryable

    def test_to_dict(self):
        cause = OSError("disk")
        error = CodecError("bad payload", cause=cause, context=ErrorContext(operation="decode"))

        d = error.to_dict()

        assert d["error_type"] == "CodecError"
        assert d["code"] == "jobq.codec"
        assert d["cause"] == repr(cause)
        assert d["context"] == {"operation": "decode"}


class TestHierarchy:
    """Test builtin bases callers rely on."""

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            raise InvalidArgumentError("bad id")

    def test_invalid_config(self):
        error = InvalidConfigError("bad file")

        assert isinstance(error, ConfigError)
        assert isinstance(error, ValueError)
        assert error.code == ErrorCode.CONFIG

    def test_timeout(self):
        error = JobTimeoutError("slow", timeout=2.5)

        assert isinstance(error, TimeoutError)
        assert error.timeout == 2.5
        assert error.retryable
        assert error.code == ErrorCode.TIMEOUT

    def test_unsupported_is_not_implemented(self):
        assert isinstance(UnsupportedOperationError("cancel"), NotImplementedError)

    def test_remote_execution_without_message(self):
        error = RemoteExecutionError(None)

        assert error.message == ""
        assert error.code == ErrorCode.REMOTE_EXECUTION

    def test_broker_connection(self):
        error = BrokerConnectionError("refused")

        assert isinstance(error, BrokerError)
        assert error.retryable
        assert error.code == ErrorCode.BROKER_UNAVAILABLE


class TestIsRetryable:
    """Test is_retryable helper."""

    def test_library_errors(self):
        assert is_retryable(BrokerConnectionError("x"))
        assert is_retryable(JobTimeoutError())
        assert not is_retryable(InvalidArgumentError("x"))

    def test_builtin_errors(self):
        assert is_retryable(ConnectionError())
        assert is_retryable(TimeoutError())
        assert not is_retryable(KeyError())
