"""Host boundary: the editor events and commands chat-echo consumes.

The hosting editor is an external collaborator. This module defines what the
capture layer needs from it:

- HostEventSource: subscribe to editor notifications and register commands,
  each call returning a Disposable cancellation handle
- ClipboardAccessor: read the current clipboard text
- Event payload dataclasses (documents, selections, terminals ...) using the
  host's 0-based positions

HostEventBus is an in-process HostEventSource. Hosts and the CLI push events
into it with ``emit()`` or ``dispatch_payload()`` (JSON payloads), and tests
use it to drive the pipeline directly.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from chat_echo.constants import CONFIG_SECTION
from chat_echo.exceptions import HostError

logger = logging.getLogger(__name__)

Disposable = Callable[[], None]
EventCallback = Callable[[Any], None]
CommandHandler = Callable[..., Any]


class HostEvent(str, Enum):
    """Editor notifications the capture layer can subscribe to."""

    DOCUMENT_OPENED = "document_opened"
    DOCUMENT_SAVED = "document_saved"
    DOCUMENT_CLOSED = "document_closed"
    DOCUMENT_CHANGED = "document_changed"
    ACTIVE_EDITOR_CHANGED = "active_editor_changed"
    SELECTION_CHANGED = "selection_changed"
    TERMINAL_OPENED = "terminal_opened"
    TERMINAL_CLOSED = "terminal_closed"
    CONFIGURATION_CHANGED = "configuration_changed"

    @classmethod
    def values(cls) -> list[str]:
        """Return list of all event names."""
        return [e.value for e in cls]


# =============================================================================
# Event Payloads
# =============================================================================


@dataclass(frozen=True)
class Position:
    """A 0-based position in a document."""

    line: int
    character: int

    def to_one_based(self) -> dict[str, int]:
        """Report the position 1-based (line 1, column 1 is the document start)."""
        return {"line": self.line + 1, "character": self.character + 1}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Position":
        return cls(line=int(data.get("line", 0)), character=int(data.get("character", 0)))


@dataclass(frozen=True)
class Selection:
    """A selection; ``active`` is where the cursor is."""

    start: Position
    end: Position
    active: Position

    @property
    def is_empty(self) -> bool:
        """True when the selection is a bare cursor."""
        return self.start == self.end

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Selection":
        start = Position.from_dict(data.get("start", {}))
        end = Position.from_dict(data.get("end", data.get("start", {})))
        active = Position.from_dict(data["active"]) if "active" in data else end
        return cls(start=start, end=end, active=active)


@dataclass(frozen=True)
class Document:
    """An open text document."""

    path: str
    file_name: str = ""
    language_id: str = "plaintext"
    line_count: int = 0
    is_dirty: bool = False
    is_untitled: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Document":
        path = str(data.get("path", ""))
        return cls(
            path=path,
            file_name=str(data.get("file_name", path)),
            language_id=str(data.get("language_id", "plaintext")),
            line_count=int(data.get("line_count", 0)),
            is_dirty=bool(data.get("is_dirty", False)),
            is_untitled=bool(data.get("is_untitled", False)),
        )


@dataclass(frozen=True)
class TextEditor:
    """An editor showing a document."""

    document: Document

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TextEditor":
        return cls(document=Document.from_dict(data.get("document", data)))


@dataclass(frozen=True)
class SelectionChange:
    """Cursor or selection moved in an editor."""

    editor: TextEditor
    selections: list[Selection]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SelectionChange":
        return cls(
            editor=TextEditor.from_dict(data.get("editor", {})),
            selections=[Selection.from_dict(s) for s in data.get("selections", [])],
        )


@dataclass(frozen=True)
class ContentChange:
    """One replaced range in a document edit."""

    start: Position
    end: Position
    range_length: int
    text: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContentChange":
        start = Position.from_dict(data.get("start", {}))
        return cls(
            start=start,
            end=Position.from_dict(data["end"]) if "end" in data else start,
            range_length=int(data.get("range_length", 0)),
            text=str(data.get("text", "")),
        )


@dataclass(frozen=True)
class DocumentChange:
    """A document edit, possibly touching several ranges."""

    document: Document
    changes: list[ContentChange] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DocumentChange":
        return cls(
            document=Document.from_dict(data.get("document", {})),
            changes=[ContentChange.from_dict(c) for c in data.get("changes", [])],
        )


@dataclass(frozen=True)
class Terminal:
    """An integrated terminal."""

    name: str
    process_id: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Terminal":
        pid = data.get("process_id")
        return cls(name=str(data.get("name", "")), process_id=int(pid) if pid is not None else None)


@dataclass(frozen=True)
class ConfigurationChange:
    """Settings changed; ``sections`` lists the affected top-level sections."""

    sections: tuple[str, ...] = (CONFIG_SECTION,)

    def affects_configuration(self, section: str) -> bool:
        """Check whether a section was touched."""
        return section in self.sections

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConfigurationChange":
        sections = data.get("sections") or [CONFIG_SECTION]
        return cls(sections=tuple(str(s) for s in sections))


def _optional_editor(data: dict[str, Any]) -> TextEditor | None:
    if not data or data.get("editor") is None and "document" not in data:
        return None
    return TextEditor.from_dict(data.get("editor") or data)


PAYLOAD_PARSERS: dict[HostEvent, Callable[[dict[str, Any]], Any]] = {
    HostEvent.DOCUMENT_OPENED: Document.from_dict,
    HostEvent.DOCUMENT_SAVED: Document.from_dict,
    HostEvent.DOCUMENT_CLOSED: Document.from_dict,
    HostEvent.DOCUMENT_CHANGED: DocumentChange.from_dict,
    HostEvent.ACTIVE_EDITOR_CHANGED: _optional_editor,
    HostEvent.SELECTION_CHANGED: SelectionChange.from_dict,
    HostEvent.TERMINAL_OPENED: Terminal.from_dict,
    HostEvent.TERMINAL_CLOSED: Terminal.from_dict,
    HostEvent.CONFIGURATION_CHANGED: ConfigurationChange.from_dict,
}


# =============================================================================
# Protocols
# =============================================================================


class HostEventSource(Protocol):
    """What the capture layer needs from the hosting editor."""

    def subscribe(self, event: HostEvent, callback: EventCallback) -> Disposable:
        """Listen for an event; calling the returned handle unsubscribes."""
        ...

    def register_command(self, command_id: str, handler: CommandHandler) -> Disposable:
        """Register a command; calling the returned handle unregisters it."""
        ...


class ClipboardAccessor(Protocol):
    """Read access to the system clipboard. May fail transiently."""

    def read_text(self) -> str:
        """Return the current clipboard text."""
        ...


# =============================================================================
# In-process implementation
# =============================================================================


class HostEventBus:
    """In-process HostEventSource.

    Listener and command failures are logged and never propagate to the
    emitter, so one faulty listener cannot stop the others.
    """

    def __init__(self) -> None:
        self._listeners: dict[HostEvent, list[EventCallback]] = {}
        self._commands: dict[str, CommandHandler] = {}
        self._lock = threading.RLock()

    def subscribe(self, event: HostEvent, callback: EventCallback) -> Disposable:
        with self._lock:
            self._listeners.setdefault(event, []).append(callback)

        def dispose() -> None:
            with self._lock:
                listeners = self._listeners.get(event, [])
                if callback in listeners:
                    listeners.remove(callback)

        return dispose

    def register_command(self, command_id: str, handler: CommandHandler) -> Disposable:
        with self._lock:
            if command_id in self._commands:
                raise HostError(
                    f"Command '{command_id}' is already registered",
                    details={"command_id": command_id},
                )
            self._commands[command_id] = handler

        def dispose() -> None:
            with self._lock:
                if self._commands.get(command_id) is handler:
                    del self._commands[command_id]

        return dispose

    def listener_count(self, event: HostEvent | None = None) -> int:
        """Number of listeners for one event (or all events)."""
        with self._lock:
            if event is not None:
                return len(self._listeners.get(event, []))
            return sum(len(listeners) for listeners in self._listeners.values())

    def has_command(self, command_id: str) -> bool:
        """Check whether a command is registered."""
        with self._lock:
            return command_id in self._commands

    @property
    def commands(self) -> list[str]:
        """Registered command identifiers."""
        with self._lock:
            return sorted(self._commands)

    def emit(self, event: HostEvent, payload: Any = None) -> int:
        """Deliver an event to every listener.

        Returns:
            Number of listeners that handled the event without raising.
        """
        with self._lock:
            listeners = list(self._listeners.get(event, []))

        delivered = 0
        for listener in listeners:
            try:
                listener(payload)
                delivered += 1
            except Exception:
                logger.error(f"Listener for {event.value} failed", exc_info=True)
        return delivered

    def execute_command(self, command_id: str, *args: Any) -> Any:
        """Invoke a registered command.

        Raises:
            HostError: If the command is not registered.
        """
        with self._lock:
            handler = self._commands.get(command_id)
        if handler is None:
            raise HostError(
                f"Command '{command_id}' is not registered",
                details={"command_id": command_id},
            )
        return handler(*args)

    def dispatch_payload(self, name: str, payload: dict[str, Any] | None = None) -> int:
        """Emit an event described by plain data (e.g. one JSON line).

        Args:
            name: HostEvent value, or ``command`` to execute a command with
                ``payload = {"command_id": ..., "args": [...]}``.
            payload: Event fields.

        Returns:
            Number of listeners reached (1 for a successful command).

        Raises:
            HostError: If the event name is unknown or the payload is malformed.
        """
        data = payload or {}
        if name == "command":
            command_id = data.get("command_id")
            if not command_id:
                raise HostError("Command payload requires 'command_id'")
            self.execute_command(str(command_id), *data.get("args", []))
            return 1

        try:
            event = HostEvent(name)
        except ValueError as e:
            raise HostError(
                f"Unknown host event '{name}'",
                details={"expected": ", ".join(HostEvent.values())},
            ) from e

        try:
            parsed = PAYLOAD_PARSERS[event](data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise HostError(f"Malformed payload for '{name}': {e}") from e
        return self.emit(event, parsed)
