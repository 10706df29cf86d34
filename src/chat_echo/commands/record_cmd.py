"""Manual conversation recording and ad-hoc classification."""

import json
import sys

import typer

from chat_echo.commands.common import build_runtime
from chat_echo.config.messages import (
    CLASSIFY_LIKELY,
    CLASSIFY_NO_TEXT,
    CLASSIFY_NOT_LIKELY,
    RECORD_BAD_CONTEXT,
    RECORD_FAILED,
    RECORD_SUCCESS,
)
from chat_echo.telemetry.classifier import classify_content
from chat_echo.telemetry.host import HostEventBus
from chat_echo.utils import console, print_error, print_success


def record_command(user_message: str, ai_response: str, context: str | None = None) -> None:
    """Append an AI_CONVERSATION entry, tracking AI content for the duration."""
    parsed_context = None
    if context is not None:
        try:
            parsed_context = json.loads(context)
        except json.JSONDecodeError as e:
            print_error(RECORD_BAD_CONTEXT.format(error=e))
            raise typer.Exit(code=1) from e

    runtime = build_runtime(HostEventBus())
    controller = runtime.controller
    started = controller.start_ai_tracking()
    try:
        conversation_id = controller.record_conversation(user_message, ai_response, parsed_context)
    finally:
        if started:
            controller.stop_ai_tracking()

    if conversation_id is None:
        print_error(RECORD_FAILED)
        raise typer.Exit(code=1)
    print_success(RECORD_SUCCESS.format(conversation_id=conversation_id))


def classify_command(text: str | None = None) -> None:
    """Classify TEXT, or stdin when TEXT is omitted."""
    if text is None and not sys.stdin.isatty():
        text = sys.stdin.read()
    if not text:
        print_error(CLASSIFY_NO_TEXT)
        raise typer.Exit(code=1)

    result = classify_content(text)
    if not result.is_likely:
        console.print(f"[dim]{CLASSIFY_NOT_LIKELY}[/dim]")
        return

    console.print(f"[bold green]{CLASSIFY_LIKELY}[/bold green]")
    for reason in result.reasons:
        console.print(f"  • {reason}")
