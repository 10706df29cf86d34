"""Tests for the host boundary: HostEventBus and payload parsing."""

import pytest

from chat_echo.exceptions import HostError
from chat_echo.telemetry.host import (
    ConfigurationChange,
    Document,
    DocumentChange,
    HostEvent,
    HostEventBus,
    Position,
    Selection,
    SelectionChange,
    TextEditor,
)


class TestSubscriptions:
    def test_emit_reaches_listeners(self, bus):
        received = []
        bus.subscribe(HostEvent.DOCUMENT_SAVED, received.append)

        assert bus.emit(HostEvent.DOCUMENT_SAVED, "payload") == 1
        assert received == ["payload"]

    def test_dispose_unsubscribes(self, bus):
        received = []
        dispose = bus.subscribe(HostEvent.DOCUMENT_SAVED, received.append)

        dispose()
        dispose()
        bus.emit(HostEvent.DOCUMENT_SAVED, "payload")

        assert received == []

    def test_failing_listener_does_not_block_others(self, bus):
        received = []

        def broken(_payload) -> None:
            raise RuntimeError("listener bug")

        bus.subscribe(HostEvent.DOCUMENT_SAVED, broken)
        bus.subscribe(HostEvent.DOCUMENT_SAVED, received.append)

        assert bus.emit(HostEvent.DOCUMENT_SAVED, 1) == 1
        assert received == [1]


class TestCommands:
    def test_execute_registered_command(self, bus):
        bus.register_command("demo.run", lambda x: x * 2)

        assert bus.execute_command("demo.run", 21) == 42

    def test_duplicate_registration_raises(self, bus):
        bus.register_command("demo.run", lambda: None)

        with pytest.raises(HostError):
            bus.register_command("demo.run", lambda: None)

    def test_unknown_command_raises(self, bus):
        with pytest.raises(HostError, match="not registered"):
            bus.execute_command("missing")

    def test_dispose_unregisters(self, bus):
        dispose = bus.register_command("demo.run", lambda: None)

        dispose()

        assert not bus.has_command("demo.run")


class TestPayloads:
    def test_position_to_one_based(self):
        assert Position(0, 0).to_one_based() == {"line": 1, "character": 1}

    def test_selection_defaults(self):
        selection = Selection.from_dict({"start": {"line": 3, "character": 2}})

        assert selection.is_empty
        assert selection.active == Position(3, 2)

    def test_document_file_name_defaults_to_path(self):
        assert Document.from_dict({"path": "/a.py"}).file_name == "/a.py"

    def test_dispatch_document_event(self, bus):
        received = []
        bus.subscribe(HostEvent.DOCUMENT_OPENED, received.append)

        bus.dispatch_payload("document_opened", {"path": "/a.py", "language_id": "python"})

        assert received == [Document(path="/a.py", file_name="/a.py", language_id="python")]

    def test_dispatch_selection_event(self, bus):
        received = []
        bus.subscribe(HostEvent.SELECTION_CHANGED, received.append)

        bus.dispatch_payload(
            "selection_changed",
            {
                "editor": {"document": {"path": "/a.py"}},
                "selections": [{"start": {"line": 1, "character": 1}}],
            },
        )

        change = received[0]
        assert isinstance(change, SelectionChange)
        assert change.editor.document.path == "/a.py"

    def test_dispatch_document_change(self, bus):
        received = []
        bus.subscribe(HostEvent.DOCUMENT_CHANGED, received.append)

        bus.dispatch_payload(
            "document_changed",
            {"document": {"path": "/a.py"}, "changes": [{"text": "x", "range_length": 0}]},
        )

        assert isinstance(received[0], DocumentChange)
        assert received[0].changes[0].text == "x"

    def test_dispatch_editor_blur(self, bus):
        received = []
        bus.subscribe(HostEvent.ACTIVE_EDITOR_CHANGED, received.append)

        bus.dispatch_payload("active_editor_changed", {})
        bus.dispatch_payload("active_editor_changed", {"document": {"path": "/b.py"}})

        assert received[0] is None
        assert received[1] == TextEditor(Document(path="/b.py", file_name="/b.py"))

    def test_dispatch_command(self, bus):
        calls = []
        bus.register_command("demo.run", lambda *args: calls.append(args))

        assert bus.dispatch_payload("command", {"command_id": "demo.run", "args": [1, 2]}) == 1
        assert calls == [(1, 2)]

    def test_dispatch_unknown_event(self, bus):
        with pytest.raises(HostError, match="Unknown host event"):
            bus.dispatch_payload("bogus", {})

    def test_dispatch_malformed_payload(self, bus):
        with pytest.raises(HostError, match="Malformed payload"):
            bus.dispatch_payload("terminal_opened", {"process_id": "not a number"})

    def test_configuration_change_default_section(self):
        change = ConfigurationChange.from_dict({})

        assert change.affects_configuration("chatEcho")
        assert not change.affects_configuration("editor")
