"""
Formatter - Level decoration for rendered records

Colors follow the usual terminal conventions:
    ERROR red, WARN yellow, INFO cyan, DEBUG blue, TRACE magenta

Styling is plain ANSI (click.style); the router strips it for file records
and click.echo strips it when the console is not a terminal.
"""

from datetime import datetime

import click
from beartype.typing import Any, Optional

from dailylog.settings import TIME_FORMAT

LEVEL_COLORS = {
    "ERROR": "red",
    "WARN": "yellow",
    "INFO": "cyan",
    "DEBUG": "blue",
    "TRACE": "magenta",
}


def current_time(now: Optional[datetime] = None) -> str:
    """Local time as "YYYY-MM-DD HH:MM:SS"."""
    return (now or datetime.now()).strftime(TIME_FORMAT)


def render(level_tag: str, message: str) -> str:
    """
    Decorate a message with its level tag.

    Args:
        level_tag: level name, e.g. "ERROR"
        message: message text

    Returns:
        "[LEVEL] message", colored for known levels
    """
    color = LEVEL_COLORS.get(level_tag.upper())
    if color is None:
        return f"[{level_tag}] {message}"
    return click.style(f"[{level_tag}] {message}", fg=color)


def type_name(value: Any) -> str:
    """Qualified name of the type of a value, e.g. "pathlib.PosixPath"."""
    value_type = type(value)
    if value_type.__module__ == "builtins":
        return value_type.__qualname__
    return f"{value_type.__module__}.{value_type.__qualname__}"
