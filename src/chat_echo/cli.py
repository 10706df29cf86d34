"""Main CLI entry point for chat-echo."""

from pathlib import Path

import typer
from dotenv import load_dotenv

from chat_echo.commands import (
    classify_command,
    clear_command,
    config_app,
    logs_command,
    path_command,
    record_command,
    watch_command,
)
from chat_echo.config.messages import HELP_TEXT, PROJECT_NAME, PROJECT_TAGLINE
from chat_echo.config.settings import get_runtime_settings
from chat_echo.constants import DEFAULT_RECENT_LINES, VERSION
from chat_echo.utils import configure_logging, console, print_panel

# Load .env file from current directory if it exists
load_dotenv(Path.cwd() / ".env", verbose=False)

app = typer.Typer(
    name="chat-echo",
    help=PROJECT_TAGLINE,
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.add_typer(config_app, name="config")


@app.command("watch")
def watch(
    events_from_stdin: bool = typer.Option(
        False,
        "--events-from-stdin",
        help="Read host events as JSON lines from stdin instead of waiting for Ctrl+C",
    ),
    no_clipboard: bool = typer.Option(
        False,
        "--no-clipboard",
        help="Do not poll the system clipboard",
    ),
) -> None:
    """Record editor activity and AI content in the foreground.

    Recording and AI tracking start according to .chat-echo/config.yaml.
    With --events-from-stdin, each input line is a JSON object such as
    {"event": "document_saved", "payload": {"path": "/src/app.py"}}.
    """
    watch_command(events_from_stdin=events_from_stdin, no_clipboard=no_clipboard)


@app.command("logs")
def logs(
    lines: int = typer.Option(
        DEFAULT_RECENT_LINES,
        "--lines",
        "-n",
        help="Number of recent lines to show",
    ),
    raw: bool = typer.Option(False, "--raw", help="Print raw JSON lines"),
    html: Path | None = typer.Option(
        None,
        "--html",
        help="Write a standalone HTML viewer to this path",
    ),
) -> None:
    """Show recent log entries."""
    logs_command(lines=lines, raw=raw, html=html)


@app.command("clear")
def clear(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Delete the log file and its backup."""
    clear_command(force=force)


@app.command("record")
def record(
    user_message: str = typer.Argument(..., help="What the user asked"),
    ai_response: str = typer.Argument(..., help="What the assistant answered"),
    context: str | None = typer.Option(None, "--context", help="Extra context as JSON"),
) -> None:
    """Log a conversation manually."""
    record_command(user_message, ai_response, context)


@app.command("classify")
def classify(
    text: str | None = typer.Argument(None, help="Text to classify (reads stdin if omitted)"),
) -> None:
    """Check whether text looks like AI assistant output."""
    classify_command(text)


@app.command("path")
def path() -> None:
    """Show the log file and backup locations."""
    path_command()


@app.command("version")
def version() -> None:
    """Show version information."""
    print_panel(
        f"[bold cyan]{PROJECT_NAME}[/bold cyan] version [green]{VERSION}[/green]\n\n"
        f"{PROJECT_TAGLINE}",
        title="Version",
        style="cyan",
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    log_file: Path | None = typer.Option(
        None,
        "--log-file",
        help="Write chat-echo diagnostics to a rotating file instead of stderr",
    ),
    version_flag: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version information",
        is_eager=True,
    ),
) -> None:
    """chat-echo - activity telemetry for editor sessions and AI conversations."""
    settings = get_runtime_settings()
    configure_logging("DEBUG" if verbose else settings.log_level, log_file=log_file)

    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(HELP_TEXT)
        raise typer.Exit()
