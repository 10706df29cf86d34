"""Start/stop lifecycle for recording and AI tracking."""

import logging
from typing import Any

from chat_echo.constants import (
    EVENT_AI_TRACKING_STARTED,
    EVENT_AI_TRACKING_STOPPED,
    EVENT_RECORDING_STARTED,
    EVENT_RECORDING_STOPPED,
    MESSAGE_AI_TRACKING_STARTED,
    MESSAGE_AI_TRACKING_STOPPED,
    MESSAGE_RECORDING_STARTED,
    MESSAGE_RECORDING_STOPPED,
)
from chat_echo.models.config import EchoConfig
from chat_echo.telemetry.capture import AIConversationCapture, EventCapture, OperationCapture
from chat_echo.telemetry.log_store import LogStore
from chat_echo.telemetry.state import SessionState, TrackingConcern

logger = logging.getLogger(__name__)


class SessionController:
    """Owns SessionState and drives the two captures.

    Every start/stop returns True only on an effective transition; repeated
    calls are no-ops and write no lifecycle marker.
    """

    def __init__(
        self,
        store: LogStore,
        recorder: OperationCapture,
        ai_capture: AIConversationCapture,
        state: SessionState,
    ):
        self._store = store
        self._recorder = recorder
        self._ai_capture = ai_capture
        self._state = state

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_recording(self) -> bool:
        return self._state.is_active(TrackingConcern.RECORDING)

    @property
    def is_ai_tracking(self) -> bool:
        return self._state.is_active(TrackingConcern.AI_TRACKING)

    def start_recording(self) -> bool:
        return self._start(
            TrackingConcern.RECORDING, self._recorder, EVENT_RECORDING_STARTED, MESSAGE_RECORDING_STARTED
        )

    def stop_recording(self) -> bool:
        return self._stop(
            TrackingConcern.RECORDING, self._recorder, EVENT_RECORDING_STOPPED, MESSAGE_RECORDING_STOPPED
        )

    def start_ai_tracking(self) -> bool:
        return self._start(
            TrackingConcern.AI_TRACKING,
            self._ai_capture,
            EVENT_AI_TRACKING_STARTED,
            MESSAGE_AI_TRACKING_STARTED,
        )

    def stop_ai_tracking(self) -> bool:
        return self._stop(
            TrackingConcern.AI_TRACKING,
            self._ai_capture,
            EVENT_AI_TRACKING_STOPPED,
            MESSAGE_AI_TRACKING_STOPPED,
        )

    def start_all(self) -> None:
        self.start_recording()
        self.start_ai_tracking()

    def stop_all(self) -> None:
        self.stop_recording()
        self.stop_ai_tracking()

    def apply_config(self, config: EchoConfig) -> None:
        """Start both concerns when enabled, stop both otherwise."""
        if config.enabled:
            self.start_all()
        else:
            self.stop_all()

    def record_conversation(
        self, user_message: str, ai_response: str, context: Any = None
    ) -> str | None:
        """Manually log a conversation while AI tracking is active."""
        return self._ai_capture.record_conversation(user_message, ai_response, context)

    def _start(
        self, concern: TrackingConcern, capture: EventCapture, entry_type: str, message: str
    ) -> bool:
        if not self._state.activate(concern):
            logger.debug(f"{concern.value} already active")
            return False
        if not capture.arm() and not capture.is_armed:
            self._state.deactivate(concern)
            logger.warning(f"Could not start {concern.value}; host subscriptions failed")
            return False
        self._store.log_operation(entry_type, {"message": message})
        logger.info(message)
        return True

    def _stop(
        self, concern: TrackingConcern, capture: EventCapture, entry_type: str, message: str
    ) -> bool:
        if not self._state.deactivate(concern):
            logger.debug(f"{concern.value} already inactive")
            return False
        capture.disarm()
        self._store.log_operation(entry_type, {"message": message})
        logger.info(message)
        return True
