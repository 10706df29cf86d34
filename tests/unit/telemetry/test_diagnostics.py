"""Tests for DiagnosticSink."""

import logging

from chat_echo.exceptions import StorageError
from chat_echo.telemetry.diagnostics import DiagnosticSink


class TestDiagnosticSink:
    def test_report_records_error(self):
        sink = DiagnosticSink()

        diagnostic = sink.report("append", OSError("disk full"), path="/tmp/x.log")

        assert diagnostic.operation == "append"
        assert diagnostic.message == "disk full"
        assert diagnostic.error_type == "OSError"
        assert diagnostic.details == {"path": "/tmp/x.log"}
        assert diagnostic.timestamp.endswith("Z")
        assert sink.recent == [diagnostic]

    def test_capacity_is_bounded(self):
        sink = DiagnosticSink(capacity=2)

        for i in range(5):
            sink.report("read", OSError(str(i)))

        assert len(sink) == 2
        assert [d.message for d in sink.recent] == ["3", "4"]
        assert sink.total == 5

    def test_for_operation_and_clear(self):
        sink = DiagnosticSink()
        sink.report("read", OSError("a"))
        sink.report("clear", OSError("b"))

        assert [d.message for d in sink.for_operation("clear")] == ["b"]

        sink.clear()
        assert sink.recent == []

    def test_logs_through_given_logger(self, caplog):
        sink_logger = logging.getLogger("tests.diagnostics")
        sink = DiagnosticSink(sink_logger=sink_logger)

        with caplog.at_level(logging.WARNING, logger="tests.diagnostics"):
            sink.report("rotate", StorageError("Log rotate failed", operation="rotate"))

        assert "rotate failed: StorageError" in caplog.text

    def test_custom_level(self, caplog):
        sink_logger = logging.getLogger("tests.diagnostics.debug")
        sink = DiagnosticSink(sink_logger=sink_logger)

        with caplog.at_level(logging.WARNING, logger="tests.diagnostics.debug"):
            sink.report("clipboard_read", OSError("no display"), level=logging.DEBUG)

        assert caplog.text == ""
        assert len(sink) == 1
