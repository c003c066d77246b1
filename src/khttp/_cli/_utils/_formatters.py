"""Output formatting for the request command.

Bodies are printed according to what the request decoded them into:
JSON-decoded values are pretty-printed, raw bytes go to stdout untouched and
text is echoed as-is.
"""

import json
from io import StringIO
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from ...models.response import Response


def format_status_line(response: Response) -> str:
    return f"{response.http_version} {response.status_code} {response.reason_phrase}"


def format_headers_table(response: Response, no_color: bool = False) -> str:
    """Render the response headers as a two-column table.

    Args:
        response: Response whose headers to render
        no_color: Disable colored output

    Returns:
        Formatted table string
    """
    table = Table(show_header=True, header_style="bold")
    table.add_column("header")
    table.add_column("value")
    for name, value in response.headers.multi_items():
        table.add_row(name, value)

    buffer = StringIO()
    console = Console(file=buffer, force_terminal=not no_color)
    console.print(table)
    return buffer.getvalue()


def _format_json(data: Any) -> str:
    return json.dumps(data, indent=2, default=str)


def format_output(body: Any, as_json: bool = False) -> None:
    """Write a decoded response body to stdout."""
    if isinstance(body, bytes):
        stdout = click.get_binary_stream("stdout")
        stdout.write(body)
        stdout.flush()
    elif as_json and not isinstance(body, str):
        click.echo(_format_json(body))
    else:
        click.echo(body)
