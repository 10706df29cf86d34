"""Log commands: view, clear and locate the telemetry log."""

from pathlib import Path

import typer

from chat_echo.commands.common import build_log_store
from chat_echo.config.messages import (
    CLEAR_CANCELLED,
    CLEAR_CONFIRM,
    CLEAR_FAILED,
    CLEAR_SUCCESS,
    LOGS_EMPTY,
    LOGS_HTML_FAILED,
    LOGS_HTML_WRITTEN,
)
from chat_echo.telemetry.viewer import build_log_table, render_html
from chat_echo.utils import console, print_error, print_info, print_success


def logs_command(lines: int, raw: bool = False, html: Path | None = None) -> None:
    """Show recent log entries."""
    store = build_log_store()
    content = store.read_recent(lines)

    if html is not None:
        try:
            html.parent.mkdir(parents=True, exist_ok=True)
            html.write_text(render_html(content), encoding="utf-8")
        except OSError as e:
            print_error(LOGS_HTML_FAILED.format(path=html, error=e))
            raise typer.Exit(code=1) from e
        print_success(LOGS_HTML_WRITTEN.format(path=html))
        return

    if not content:
        print_info(LOGS_EMPTY)
        return

    if raw:
        # Plain print keeps JSON intact for piping
        typer.echo(content)
        return

    console.print(build_log_table(content))


def clear_command(force: bool = False) -> None:
    """Delete the log and its backup."""
    store = build_log_store()
    if not force and not typer.confirm(CLEAR_CONFIRM.format(path=store.path)):
        print_info(CLEAR_CANCELLED)
        raise typer.Exit(code=0)

    if not store.clear():
        print_error(CLEAR_FAILED)
        raise typer.Exit(code=1)
    print_success(CLEAR_SUCCESS)


def path_command() -> None:
    """Print the log and backup locations."""
    store = build_log_store()
    typer.echo(str(store.path))
    typer.echo(str(store.backup_path))
