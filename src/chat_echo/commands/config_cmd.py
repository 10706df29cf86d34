"""Configuration commands.

Commands:
- show: Print the effective settings and the config file location
- set: Change one setting in .chat-echo/config.yaml
"""

from pathlib import Path
from typing import Any

import typer
import yaml
from rich.table import Table

from chat_echo.config.messages import CONFIG_FILE_LABEL, CONFIG_UPDATED
from chat_echo.exceptions import ConfigurationError
from chat_echo.services.config_service import ConfigService
from chat_echo.utils import console, print_error, print_info, print_success

config_app = typer.Typer(
    name="config",
    help="Show or change chat-echo settings",
    no_args_is_help=True,
)


def parse_config_value(raw: str) -> Any:
    """Interpret a CLI value with YAML scalar rules (true, 10, 2.5, text)."""
    try:
        value = yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw
    if value is None:
        return ""
    return value


@config_app.command("show")
def show() -> None:
    """Show the effective configuration."""
    service = ConfigService(Path.cwd())
    config = service.load_config()

    table = Table(title="chatEcho")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    for key, value in config.to_yaml_dict().items():
        table.add_row(key, str(value))

    console.print(table)
    print_info(CONFIG_FILE_LABEL.format(path=service.config_path))


@config_app.command("set")
def set_value(
    key: str = typer.Argument(..., help="Setting name, e.g. recordAIChat or max_log_file_size"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Change one setting."""
    service = ConfigService(Path.cwd())
    try:
        service.update_config(**{key: parse_config_value(value)})
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(CONFIG_UPDATED.format(key=key, value=value))
