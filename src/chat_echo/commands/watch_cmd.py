"""Watch command: run chat-echo in the foreground."""

import json
import sys
import time
from typing import TextIO

from chat_echo.commands.common import build_runtime
from chat_echo.config.messages import (
    WATCH_BAD_EVENT,
    WATCH_DISABLED,
    WATCH_STARTED,
    WATCH_STDIN_HINT,
    WATCH_STOP_HINT,
    WATCH_STOPPED,
)
from chat_echo.exceptions import HostError
from chat_echo.telemetry.clipboard import SystemClipboard
from chat_echo.telemetry.host import HostEventBus
from chat_echo.utils import print_info, print_success, print_warning


def feed_events(bus: HostEventBus, stream: TextIO) -> int:
    """Dispatch JSON event lines into the bus.

    Each line is ``{"event": "<host event or 'command'>", "payload": {...}}``.
    Malformed lines are reported and skipped.

    Returns:
        Number of lines dispatched successfully.
    """
    dispatched = 0
    for line_number, line in enumerate(stream, start=1):
        if not line.strip():
            continue
        try:
            message = json.loads(line)
            if not isinstance(message, dict) or "event" not in message:
                raise ValueError("expected an object with an 'event' field")
            bus.dispatch_payload(str(message["event"]), message.get("payload"))
            dispatched += 1
        except (ValueError, TypeError, HostError) as e:
            print_warning(WATCH_BAD_EVENT.format(line_number=line_number, error=e))
    return dispatched


def watch_command(events_from_stdin: bool = False, no_clipboard: bool = False) -> None:
    """Activate a runtime and keep it running until interrupted or stdin ends."""
    bus = HostEventBus()
    runtime = build_runtime(bus, clipboard=None if no_clipboard else SystemClipboard())
    runtime.activate()

    if runtime.config.enabled:
        print_success(WATCH_STARTED.format(path=runtime.store.path))
    else:
        print_warning(WATCH_DISABLED)

    try:
        if events_from_stdin:
            print_info(WATCH_STDIN_HINT)
            feed_events(bus, sys.stdin)
        else:
            print_info(WATCH_STOP_HINT)
            while True:
                time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        runtime.deactivate()
        print_info(WATCH_STOPPED)
