"""Log viewer: render recent log content as a rich table or an HTML page.

Malformed lines are never dropped; they are shown verbatim so a corrupted
log is still readable.
"""

import json
from dataclasses import dataclass
from pathlib import Path

import jinja2
from rich.table import Table
from rich.text import Text

from chat_echo.models.entry import LogEntry

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"
LOG_VIEWER_TEMPLATE = "log_viewer.html.j2"
DEFAULT_VIEWER_TITLE = "Chat Echo Logs"
DATA_PREVIEW_CHARS = 120


@dataclass(frozen=True)
class LogLine:
    """One line of log content: a parsed entry, or the raw text if unparsable."""

    raw: str
    entry: LogEntry | None = None

    @property
    def is_valid(self) -> bool:
        return self.entry is not None

    @property
    def pretty_data(self) -> str:
        if self.entry is None:
            return self.raw
        return json.dumps(self.entry.data, indent=2, ensure_ascii=False, default=str)


def parse_log_lines(content: str) -> list[LogLine]:
    """Split log content into LogLines, skipping blank lines."""
    lines = []
    for raw in content.splitlines():
        if not raw.strip():
            continue
        try:
            lines.append(LogLine(raw=raw, entry=LogEntry.from_json_line(raw)))
        except ValueError:
            lines.append(LogLine(raw=raw))
    return lines


def _preview(line: LogLine) -> str:
    text = json.dumps(line.entry.data, ensure_ascii=False, default=str) if line.entry else line.raw
    if len(text) > DATA_PREVIEW_CHARS:
        return text[: DATA_PREVIEW_CHARS - 3] + "..."
    return text


def build_log_table(content: str, title: str = DEFAULT_VIEWER_TITLE) -> Table:
    """Build a rich Table of the log content.

    Log text goes in as Text cells so brackets in it are never read as markup.
    """
    table = Table(title=title)
    table.add_column("Timestamp", style="dim", no_wrap=True)
    table.add_column("Type", style="cyan")
    table.add_column("Data")

    for line in parse_log_lines(content):
        if line.entry is None:
            table.add_row("", Text("unparsable", style="red"), Text(_preview(line)))
        else:
            table.add_row(Text(line.entry.timestamp), Text(line.entry.type), Text(_preview(line)))
    return table


def render_html(content: str, title: str = DEFAULT_VIEWER_TITLE) -> str:
    """Render log content as a standalone HTML page.

    Args:
        content: Newline-separated log lines (as returned by read_recent).
        title: Page title.

    Returns:
        HTML document; all log text is escaped.
    """
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=True,
        undefined=jinja2.StrictUndefined,
    )
    template = env.get_template(LOG_VIEWER_TEMPLATE)
    return template.render(title=title, lines=parse_log_lines(content))
