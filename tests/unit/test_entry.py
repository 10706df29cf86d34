"""Tests for LogEntry serialization and timestamps."""

import json
from datetime import datetime, timezone

import pytest

from chat_echo.models.entry import LogEntry, utc_timestamp


class TestUtcTimestamp:
    def test_millisecond_precision_with_z(self):
        moment = datetime(2025, 1, 15, 12, 30, 45, 123456, tzinfo=timezone.utc)

        assert utc_timestamp(moment) == "2025-01-15T12:30:45.123Z"


class TestLogEntry:
    def test_json_line_is_single_line(self):
        entry = LogEntry.create("TEXT_CHANGE", {"text": "a\nb"})

        line = entry.to_json_line()

        assert line.endswith("\n")
        assert line.count("\n") == 1
        assert json.loads(line)["data"]["text"] == "a\nb"

    def test_parse_preserves_fields(self):
        entry = LogEntry("2025-01-15T12:00:00.000Z", "FILE_OPEN", {"line_count": 3, "nested": {"a": [1]}})

        assert LogEntry.from_json_line(entry.to_json_line()) == entry

    def test_create_copies_data(self):
        data = {"a": 1}
        entry = LogEntry.create("X", data)
        data["a"] = 2

        assert entry.data == {"a": 1}

    def test_null_data_becomes_empty(self):
        entry = LogEntry.from_json_line('{"timestamp": "t", "type": "X", "data": null}')

        assert entry.data == {}

    @pytest.mark.parametrize(
        "line",
        [
            "not json",
            "[1, 2]",
            '{"type": "X"}',
            '{"timestamp": "t", "type": "X", "data": "text"}',
        ],
    )
    def test_malformed_lines(self, line):
        with pytest.raises(ValueError):
            LogEntry.from_json_line(line)
