"""
Tests for JSON serialization and timestamp helpers.
"""

from datetime import datetime, timezone

import pytest

from jobq.serialization import dumps, dumps_text, loads
from jobq.task import Task
from jobq.timeutil import now_iso, parse_iso


class TestSerialization:
    """Test orjson helpers."""

    def test_sorted_output_is_stable(self):
        """Test key order does not change sorted output."""
        assert dumps({"b": 1, "a": [2, 1]}, sort_keys=True) == dumps({"a": [2, 1], "b": 1}, sort_keys=True)

    def test_fallback_types(self):
        """Test sets, bytes, types and to_dict objects are encoded."""
        data = loads(dumps({"s": {3, 1, 2}, "b": b"raw", "t": int, "task": Task("operator:add", args=(1, 2))}))

        assert data["s"] == [1, 2, 3]
        assert data["b"] == "raw"
        assert data["t"] == "builtins.int"
        assert data["task"] == {"func": "operator:add", "args": [1, 2], "kwargs": {}}

    def test_datetime_native(self):
        when = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

        assert loads(dumps({"when": when})) == {"when": "2024-01-02T03:04:05+00:00"}

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            dumps(object())

    def test_text_round_trip(self):
        payload = {"status": "SUCCESS", "n": 3}

        assert isinstance(dumps_text(payload), str)
        assert loads(dumps_text(payload)) == payload


class TestTimestamps:
    """Test ISO-8601 timestamp fields."""

    def test_now_iso_is_utc(self):
        parsed = parse_iso(now_iso())

        assert parsed.tzinfo is not None
        assert abs((datetime.now(timezone.utc) - parsed).total_seconds()) < 5

    def test_parse_zulu(self):
        assert parse_iso("2024-05-01T12:00:00Z") == datetime(2024, 5, 1, 12, tzinfo=timezone.utc)

    def test_parse_naive_assumes_utc(self):
        assert parse_iso("2024-05-01T12:00:00").tzinfo == timezone.utc

    def test_parse_invalid(self):
        assert parse_iso(None) is None
        assert parse_iso("") is None
        assert parse_iso("not a date") is None
