"""Session state shared between the controller and the captures.

One boolean per tracking concern. The SessionController is the only writer;
captures hold a reference and read it to short-circuit forwarding while their
concern is inactive.
"""

from dataclasses import dataclass, field
from enum import Enum
from threading import RLock
from typing import Any


class TrackingConcern(str, Enum):
    """Independently started/stopped tracking concerns."""

    RECORDING = "recording"
    AI_TRACKING = "ai_tracking"


@dataclass
class SessionState:
    """Thread-safe activity flags for one logging session."""

    recording_active: bool = False
    ai_tracking_active: bool = False
    _lock: RLock = field(default_factory=RLock, init=False, repr=False)

    def is_active(self, concern: TrackingConcern) -> bool:
        """Check whether a concern is currently active."""
        with self._lock:
            if concern is TrackingConcern.RECORDING:
                return self.recording_active
            return self.ai_tracking_active

    def activate(self, concern: TrackingConcern) -> bool:
        """Mark a concern active.

        Returns:
            True if the state changed, False if it was already active.
        """
        return self._transition(concern, True)

    def deactivate(self, concern: TrackingConcern) -> bool:
        """Mark a concern inactive.

        Returns:
            True if the state changed, False if it was already inactive.
        """
        return self._transition(concern, False)

    def _transition(self, concern: TrackingConcern, active: bool) -> bool:
        with self._lock:
            if self.is_active(concern) == active:
                return False
            if concern is TrackingConcern.RECORDING:
                self.recording_active = active
            else:
                self.ai_tracking_active = active
            return True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for status output (thread-safe)."""
        with self._lock:
            return {
                "recording_active": self.recording_active,
                "ai_tracking_active": self.ai_tracking_active,
            }
