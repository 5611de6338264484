"""
Tests for the structured logging module.
"""

import logging
import threading
import time

import orjson

import jobq.logging as jobq_logging
from jobq.errors import BrokerConnectionError, ErrorContext
from jobq.logging import (
    JSONFormatter,
    LogContext,
    StructuredLogger,
    TextFormatter,
    Timer,
    clip,
    configure_logging,
    current_context,
    get_logger,
    timed,
)


def _fields(record: logging.LogRecord) -> dict:
    return getattr(record, "fields", {})


class TestLogContext:
    """Test LogContext dataclass."""

    def test_to_dict_drops_empty(self):
        """Test None fields are omitted and extras flattened."""
        ctx = LogContext(trace_id="t1", job_id="job-0001", extra={"attempt": 1})

        assert ctx.to_dict() == {"trace_id": "t1", "job_id": "job-0001", "attempt": 1}

    def test_with_update(self):
        """Test updates copy the context and merge extras."""
        ctx = LogContext(trace_id="t1", queue="default", extra={"a": 1})
        updated = ctx.with_update(worker_id="w1", extra={"b": 2})

        assert updated.trace_id == "t1"
        assert updated.queue == "default"
        assert updated.worker_id == "w1"
        assert updated.extra == {"a": 1, "b": 2}
        assert ctx.worker_id is None


class TestStructuredLogger:
    """Test StructuredLogger class."""

    def test_create_logger(self):
        logger = StructuredLogger("jobq.test.create", level="DEBUG")

        assert logger.name == "jobq.test.create"
        assert logger.json_output is True
        assert logger.logger.level == logging.DEBUG

    def test_job_context(self):
        """Test job context is applied and then restored."""
        logger = StructuredLogger("jobq.test.context")

        with logger.job_context(job_id="job-0001", queue="default") as trace_id:
            assert trace_id.startswith("trace_")
            assert logger.context.job_id == "job-0001"
            assert current_context().queue == "default"

        assert logger.context.trace_id is None
        assert logger.context.job_id is None

    def test_job_context_is_per_thread(self):
        """Test another thread does not see this thread's job context."""
        logger = StructuredLogger("jobq.test.threads")
        seen = []

        with logger.job_context(job_id="job-main"):
            thread = threading.Thread(target=lambda: seen.append(current_context().job_id))
            thread.start()
            thread.join()

        assert seen == [None]

    def test_records_carry_fields(self, caplog):
        """Test records carry context and call fields."""
        logger = StructuredLogger("jobq.test.fields", level="DEBUG")

        with caplog.at_level(logging.DEBUG, logger="jobq.test.fields"):
            with logger.job_context(job_id="job-0001"):
                logger.info("Job started", attempt=2)

        record = caplog.records[-1]
        assert record.getMessage() == "Job started"
        assert _fields(record)["job_id"] == "job-0001"
        assert _fields(record)["attempt"] == 2

    def test_level_filtering(self, caplog):
        logger = StructuredLogger("jobq.test.level", level="WARNING")

        with caplog.at_level(logging.WARNING, logger="jobq.test.level"):
            logger.debug("hidden")
            logger.error("shown")

        messages = [r.getMessage() for r in caplog.records if r.name == "jobq.test.level"]
        assert messages == ["shown"]

    def test_log_transition(self, caplog):
        logger = StructuredLogger("jobq.test.transition", level="DEBUG")

        with caplog.at_level(logging.DEBUG, logger="jobq.test.transition"):
            logger.log_transition("job-0001", "STARTED")

        fields = _fields(caplog.records[-1])
        assert fields["event"] == "transition"
        assert fields["status"] == "STARTED"

    def test_log_error(self, caplog):
        """Test library errors add their code and retryability."""
        logger = StructuredLogger("jobq.test.error")
        error = BrokerConnectionError("refused", context=ErrorContext(operation="hget"))

        with caplog.at_level(logging.ERROR, logger="jobq.test.error"):
            logger.log_error(error, "Broker down")

        record = caplog.records[-1]
        assert record.getMessage() == "Broker down"
        assert _fields(record)["error_type"] == "BrokerConnectionError"
        assert _fields(record)["error_code"] == "jobq.broker_unavailable"
        assert _fields(record)["retryable"] is True

    def test_log_error_plain_exception(self, caplog):
        logger = StructuredLogger("jobq.test.plain")

        with caplog.at_level(logging.WARNING, logger="jobq.test.plain"):
            logger.log_error(RuntimeError("boom"), level=logging.WARNING)

        fields = _fields(caplog.records[-1])
        assert fields["error_message"] == "boom"
        assert "error_code" not in fields


class TestFormatters:
    """Test record formatters."""

    def _record(self, message: str, **fields) -> logging.LogRecord:
        record = logging.LogRecord("jobq", logging.INFO, __file__, 1, message, None, None)
        record.fields = fields
        return record

    def test_json_formatter(self):
        out = orjson.loads(JSONFormatter().format(self._record("hi", job_id="j1")))

        assert out["message"] == "hi"
        assert out["level"] == "INFO"
        assert out["logger"] == "jobq"
        assert out["job_id"] == "j1"
        assert "timestamp" in out

    def test_json_formatter_foreign_record(self):
        """Test records without fields still format."""
        record = logging.LogRecord("other", logging.WARNING, __file__, 1, "plain", None, None)

        assert orjson.loads(JSONFormatter().format(record))["message"] == "plain"

    def test_text_formatter(self):
        line = TextFormatter().format(self._record("Slow job", seconds=3))

        assert "INFO" in line
        assert line.endswith("Slow job seconds=3")


class TestLoggerRegistry:
    """Test get_logger / configure_logging."""

    def test_get_logger_cached(self):
        assert get_logger("jobq.test.cached") is get_logger("jobq.test.cached")

    def test_loggers_add_no_handlers(self, caplog):
        """Test records reach the application's handlers exactly once."""
        logger = StructuredLogger("jobq.test.bare")

        with caplog.at_level(logging.INFO, logger="jobq.test.bare"):
            logger.info("once")

        assert logger.logger.handlers == []
        assert [r.getMessage() for r in caplog.records if r.name == "jobq.test.bare"] == ["once"]

    def test_configure_logging(self, monkeypatch):
        """Test one shared handler is installed and reformatted."""
        monkeypatch.setattr(jobq_logging, "_handler", None)
        package = logging.getLogger("jobq")
        logger = get_logger("jobq.test.configured")

        configure_logging(level="WARNING", json_output=False)
        handler = jobq_logging._handler
        try:
            configure_logging(level="WARNING", json_output=False)

            assert jobq_logging._handler is handler
            assert package.handlers.count(handler) == 1
            assert isinstance(handler.formatter, TextFormatter)
            assert logger.logger.handlers == []
            assert logger.json_output is False
            assert logger.logger.level == logging.WARNING
            assert get_logger("jobq.test.configured.new").json_output is False
        finally:
            configure_logging()
            package.removeHandler(handler)

        assert isinstance(handler.formatter, JSONFormatter)
        assert logger.json_output is True


class TestTimer:
    """Test Timer utility."""

    def test_timer(self):
        timer = Timer()
        time.sleep(0.01)
        duration = timer.stop()

        assert duration >= 9
        assert timer.elapsed_ms == duration

    def test_timed(self):
        with timed() as timer:
            time.sleep(0.01)

        assert timer.elapsed_ms >= 9


def test_clip():
    assert clip("short") == "short"

    clipped = clip("x" * 300, limit=100)
    assert clipped.startswith("x" * 100)
    assert clipped.endswith("(300 chars)")
