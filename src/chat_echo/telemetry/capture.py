"""Event capture: translate host notifications into log entries.

Two captures share one EventCapture base:

- OperationCapture: structural editor events (cursor, focus, file and text
  changes, recorded commands) for the ``recording`` concern
- AIConversationCapture: clipboard polling, AI command observers, terminal
  lifecycle and manual conversation entries for the ``ai_tracking`` concern

A capture is armed and disarmed by the SessionController. Arming subscribes
to the host and collects every returned cancellation handle; disarming calls
them all. While its concern is inactive in SessionState a capture forwards
nothing, even if a late callback arrives after disarm.
"""

import logging
import threading
import time
import uuid
from collections.abc import Callable
from typing import Any

from chat_echo.constants import (
    AI_COMMAND_TRACK_PREFIX,
    AI_RELATED_COMMANDS,
    CLIPBOARD_POLL_INTERVAL_SECONDS,
    COMMAND_RECORD_COMMAND,
    CONVERSATION_ID_PREFIX,
    EVENT_AI_CLIPBOARD_CONTENT,
    EVENT_AI_COMMAND_EXECUTED,
    EVENT_AI_CONVERSATION,
    EVENT_COMMAND_EXECUTION,
    EVENT_CURSOR_MOVEMENT,
    EVENT_EDITOR_BLUR,
    EVENT_EDITOR_FOCUS,
    EVENT_FILE_CLOSE,
    EVENT_FILE_OPEN,
    EVENT_FILE_SAVE,
    EVENT_TERMINAL_CLOSED,
    EVENT_TERMINAL_OPENED,
    EVENT_TEXT_CHANGE,
    MESSAGE_EDITOR_BLUR,
    PERIODIC_TASK_JOIN_TIMEOUT_SECONDS,
)
from chat_echo.models.config import EchoConfig
from chat_echo.models.entry import utc_timestamp
from chat_echo.telemetry.classifier import ContentClassifier, get_content_classifier
from chat_echo.telemetry.diagnostics import DiagnosticSink
from chat_echo.telemetry.host import (
    ClipboardAccessor,
    Disposable,
    Document,
    DocumentChange,
    HostEvent,
    HostEventSource,
    SelectionChange,
    Terminal,
    TextEditor,
)
from chat_echo.telemetry.log_store import LogStore
from chat_echo.telemetry.state import SessionState, TrackingConcern

logger = logging.getLogger(__name__)

ConfigAccessor = Callable[[], EchoConfig]


class PeriodicTask:
    """Runs a callback every ``interval`` seconds on a daemon thread.

    The first tick happens one interval after ``start()``. ``cancel()`` stops
    future ticks; a tick already running is allowed to finish.
    """

    def __init__(self, interval: float, callback: Callable[[], Any], name: str = "periodic-task"):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._interval = interval
        self._callback = callback
        self._name = name
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        """Check whether the worker thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> Disposable:
        """Start ticking.

        Returns:
            Cancellation handle (same as ``cancel``).
        """
        with self._lock:
            if self._thread is None:
                self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
                self._thread.start()
        return self.cancel

    def cancel(self) -> None:
        """Stop future ticks and wait briefly for the worker to exit."""
        self._stop_event.set()
        with self._lock:
            thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=PERIODIC_TASK_JOIN_TIMEOUT_SECONDS)

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            try:
                self._callback()
            except Exception:
                logger.error(f"{self._name} tick failed", exc_info=True)


class EventCapture:
    """Base class managing arm/disarm and subscription handles."""

    concern: TrackingConcern = TrackingConcern.RECORDING

    def __init__(
        self,
        store: LogStore,
        host: HostEventSource,
        state: SessionState,
        config_accessor: ConfigAccessor,
        diagnostics: DiagnosticSink | None = None,
    ):
        self._store = store
        self._host = host
        self._state = state
        self._config_accessor = config_accessor
        self._diagnostics = diagnostics or store.diagnostics
        self._disposables: list[Disposable] = []
        self._armed = False
        self._lock = threading.Lock()

    @property
    def is_armed(self) -> bool:
        """Check whether host subscriptions are in place."""
        return self._armed

    @property
    def subscription_count(self) -> int:
        """Number of live cancellation handles."""
        return len(self._disposables)

    @property
    def config(self) -> EchoConfig:
        """Current configuration, read on every event."""
        return self._config_accessor()

    def arm(self) -> bool:
        """Subscribe to the host.

        A subscription failure releases whatever was already registered and
        is reported to diagnostics; the capture stays disarmed.

        Returns:
            True if the capture was armed by this call.
        """
        with self._lock:
            if self._armed:
                return False
            try:
                self._subscribe()
            except Exception as e:
                partial, self._disposables = self._disposables, []
                self._release(partial)
                self._diagnostics.report("arm", e, capture=type(self).__name__)
                return False
            self._armed = True
        logger.debug(f"{type(self).__name__} armed with {len(self._disposables)} subscriptions")
        return True

    def disarm(self) -> bool:
        """Release every subscription and timer.

        Returns:
            True if the capture was disarmed by this call.
        """
        with self._lock:
            if not self._armed:
                return False
            disposables, self._disposables = self._disposables, []
            self._armed = False

        self._release(disposables)
        logger.debug(f"{type(self).__name__} disarmed")
        return True

    def _release(self, disposables: list[Disposable]) -> None:
        for dispose in disposables:
            try:
                dispose()
            except Exception as e:
                self._diagnostics.report("dispose", e, capture=type(self).__name__)

    def _subscribe(self) -> None:
        """Register host subscriptions (called under the arm lock)."""
        raise NotImplementedError

    def _track(self, disposable: Disposable) -> None:
        self._disposables.append(disposable)

    def _on(self, event: HostEvent, callback: Callable[[Any], None]) -> None:
        self._track(self._host.subscribe(event, callback))

    def _is_active(self) -> bool:
        return self._state.is_active(self.concern)

    def _emit(self, entry_type: str, data: dict[str, Any]) -> bool:
        if not self._is_active():
            return False
        return self._store.log_operation(entry_type, data)


class OperationCapture(EventCapture):
    """Records structural editor activity."""

    concern = TrackingConcern.RECORDING

    def _subscribe(self) -> None:
        self._on(HostEvent.SELECTION_CHANGED, self.on_selection_changed)
        self._on(HostEvent.ACTIVE_EDITOR_CHANGED, self.on_active_editor_changed)
        self._on(HostEvent.DOCUMENT_OPENED, self.on_document_opened)
        self._on(HostEvent.DOCUMENT_SAVED, self.on_document_saved)
        self._on(HostEvent.DOCUMENT_CLOSED, self.on_document_closed)
        self._on(HostEvent.DOCUMENT_CHANGED, self.on_document_changed)
        self._track(self._host.register_command(COMMAND_RECORD_COMMAND, self.record_command))

    def on_selection_changed(self, event: SelectionChange) -> None:
        if not self.config.record_cursor_movement or not event.selections:
            return
        selection = event.selections[0]
        document = event.editor.document
        active = selection.active.to_one_based()
        self._emit(
            EVENT_CURSOR_MOVEMENT,
            {
                "file_path": document.path,
                "file_name": document.file_name,
                "line": active["line"],
                "character": active["character"],
                "selection_start": selection.start.to_one_based(),
                "selection_end": selection.end.to_one_based(),
                "is_selection": not selection.is_empty,
            },
        )

    def on_active_editor_changed(self, editor: TextEditor | None) -> None:
        if editor is None:
            self._emit(EVENT_EDITOR_BLUR, {"message": MESSAGE_EDITOR_BLUR})
            return
        document = editor.document
        self._emit(
            EVENT_EDITOR_FOCUS,
            {
                "file_path": document.path,
                "file_name": document.file_name,
                "language": document.language_id,
                "line_count": document.line_count,
            },
        )

    def on_document_opened(self, document: Document) -> None:
        self._file_operation(EVENT_FILE_OPEN, document)

    def on_document_saved(self, document: Document) -> None:
        self._file_operation(EVENT_FILE_SAVE, document)

    def on_document_closed(self, document: Document) -> None:
        self._file_operation(EVENT_FILE_CLOSE, document)

    def on_document_changed(self, event: DocumentChange) -> None:
        if not event.changes:
            return
        changes = [
            {
                "range": {
                    "start": change.start.to_one_based(),
                    "end": change.end.to_one_based(),
                },
                "range_length": change.range_length,
                "text": change.text,
            }
            for change in event.changes
        ]
        self._emit(
            EVENT_TEXT_CHANGE,
            {
                "file_path": event.document.path,
                "file_name": event.document.file_name,
                "changes": changes,
                "change_count": len(changes),
            },
        )

    def record_command(self, command_id: str, args: Any = None) -> None:
        """Handler for the ``chatEcho.recordCommand`` host command."""
        self._emit(
            EVENT_COMMAND_EXECUTION,
            {
                "command_id": command_id,
                "arguments": args,
                "timestamp": utc_timestamp(),
            },
        )

    def _file_operation(self, entry_type: str, document: Document) -> None:
        if not self.config.record_file_operations:
            return
        self._emit(
            entry_type,
            {
                "file_path": document.path,
                "file_name": document.file_name,
                "language": document.language_id,
                "line_count": document.line_count,
                "is_dirty": document.is_dirty,
                "is_untitled": document.is_untitled,
            },
        )


def new_conversation_id() -> str:
    """Build a unique ``conv_<epoch-ms>_<random>`` identifier."""
    return f"{CONVERSATION_ID_PREFIX}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


class AIConversationCapture(EventCapture):
    """Tracks AI assistant content: clipboard, AI commands, terminals.

    Nothing is set up when ``recordAIChat`` is false at arm time.
    """

    concern = TrackingConcern.AI_TRACKING

    def __init__(
        self,
        store: LogStore,
        host: HostEventSource,
        state: SessionState,
        config_accessor: ConfigAccessor,
        clipboard: ClipboardAccessor | None = None,
        classifier: ContentClassifier | None = None,
        poll_interval: float = CLIPBOARD_POLL_INTERVAL_SECONDS,
        diagnostics: DiagnosticSink | None = None,
    ):
        super().__init__(store, host, state, config_accessor, diagnostics)
        self._clipboard = clipboard
        self._classifier = classifier or get_content_classifier()
        self._poll_interval = poll_interval
        self._last_clipboard_content = ""
        self._poll_lock = threading.Lock()

    @property
    def last_clipboard_content(self) -> str:
        """Most recent non-blank clipboard text seen."""
        return self._last_clipboard_content

    def _subscribe(self) -> None:
        if not self.config.record_ai_chat:
            logger.debug("AI chat recording disabled; no AI subscriptions")
            return

        if self._clipboard is not None:
            poller = PeriodicTask(self._poll_interval, self.poll_clipboard, name="chat-echo-clipboard")
            self._track(poller.cancel)
            poller.start()

        for command_id in AI_RELATED_COMMANDS:
            try:
                self._track(
                    self._host.register_command(
                        f"{AI_COMMAND_TRACK_PREFIX}{command_id}",
                        self._command_observer(command_id),
                    )
                )
            except Exception as e:
                self._diagnostics.report("register_command", e, command_id=command_id)

        self._on(HostEvent.TERMINAL_OPENED, self.on_terminal_opened)
        self._on(HostEvent.TERMINAL_CLOSED, self.on_terminal_closed)

    def poll_clipboard(self) -> bool:
        """Run one clipboard tick.

        Returns:
            True if an AI_CLIPBOARD_CONTENT entry was appended.
        """
        if self._clipboard is None or not self._is_active():
            return False
        try:
            text = self._clipboard.read_text()
        except Exception as e:
            self._diagnostics.report("clipboard_read", e, level=logging.DEBUG)
            return False

        with self._poll_lock:
            if not text or not text.strip() or text == self._last_clipboard_content:
                return False
            self._last_clipboard_content = text

        result = self._classifier.classify(text)
        if not result.is_likely:
            return False
        return self._emit(
            EVENT_AI_CLIPBOARD_CONTENT,
            {
                "content": text,
                "content_length": len(text),
                "detection_reasons": result.reasons,
            },
        )

    def on_terminal_opened(self, terminal: Terminal) -> None:
        self._emit(EVENT_TERMINAL_OPENED, {"name": terminal.name, "process_id": terminal.process_id})

    def on_terminal_closed(self, terminal: Terminal) -> None:
        self._emit(EVENT_TERMINAL_CLOSED, {"name": terminal.name, "process_id": terminal.process_id})

    def record_conversation(
        self,
        user_message: str,
        ai_response: str,
        context: Any = None,
    ) -> str | None:
        """Append an AI_CONVERSATION entry without consulting the classifier.

        Returns:
            The generated conversation id, or None when AI tracking is inactive.
        """
        if not self._is_active():
            logger.debug("AI tracking inactive; conversation not recorded")
            return None
        conversation_id = new_conversation_id()
        self._store.log_operation(
            EVENT_AI_CONVERSATION,
            {
                "conversation_id": conversation_id,
                "user_message": user_message,
                "ai_response": ai_response,
                "context": context,
                "timestamp": utc_timestamp(),
            },
        )
        return conversation_id

    def _command_observer(self, command_id: str) -> Callable[..., None]:
        def observe(*args: Any) -> None:
            self._emit(
                EVENT_AI_COMMAND_EXECUTED,
                {
                    "command_id": command_id,
                    "arguments": list(args),
                    "timestamp": utc_timestamp(),
                },
            )

        return observe
