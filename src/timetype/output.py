"""Rich rendering for the CLI.

Renders to a StringIO-backed Console; in non-TTY environments (tests,
pipes) Rich disables color codes automatically.
"""

from __future__ import annotations

import json
from io import StringIO
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from timetype.clock import Clock
from timetype.duration import Duration

TIMETYPE_THEME = Theme(
    {
        "tt.key": "dim",
        "tt.value": "bold",
        "tt.error": "bold red",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=TIMETYPE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def clock_fields(clock: Clock) -> dict[str, Any]:
    return {
        "display": str(clock),
        "debug": repr(clock),
        "json": clock.to_json().decode(),
        "value": clock.value(),
    }


def duration_fields(duration: Duration) -> dict[str, Any]:
    return {
        "literal": str(duration),
        "nanoseconds": duration.value(),
        "json": duration.to_json().decode(),
    }


def render_fields(fields: dict[str, Any], *, json_output: bool = False) -> str:
    """Render a field mapping as a two-column table or a JSON object."""
    if json_output:
        return json.dumps(fields, ensure_ascii=False)

    console = create_console()
    table = Table(show_header=False, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Field", style="tt.key", no_wrap=True)
    table.add_column("Value", style="tt.value")
    for key, val in fields.items():
        table.add_row(key, Text(str(val)))
    console.print(table)
    return get_output(console).rstrip("\n")


def render_error(message: str, *, json_output: bool = False) -> str:
    if json_output:
        return json.dumps({"error": message}, ensure_ascii=False)
    console = create_console()
    console.print(Text("ERROR", style="tt.error"), Text(message))
    return get_output(console).rstrip("\n")
