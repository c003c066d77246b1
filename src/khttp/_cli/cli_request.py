"""CLI command for issuing a single HTTP request.

The command maps its flags onto a khttp options record, runs the request on
a fresh event loop and prints the outcome:
- the decoded body (JSON pretty-printed with ``--json``)
- optionally the status line and a headers table (``--include``)
- the raw stream as it arrives (``--stream``), which uses raw mode
"""

import asyncio
import json
import logging
from typing import Any, BinaryIO, Optional

import click

from .._api import request as send_request
from .._utils import format_error
from ..models.response import Completion
from ._utils._formatters import format_headers_table, format_output, format_status_line

logger = logging.getLogger(__name__)


def parse_header(value: str) -> tuple[str, str]:
    name, sep, header = value.partition(":")
    if not sep or not name.strip():
        raise click.BadParameter(f"expected 'Name: value', got {value!r}", param_hint="--header")
    return name.strip(), header.strip()


def build_options(
    url: str,
    method: str,
    headers: tuple[str, ...],
    query: Optional[str],
    as_json: bool,
    user: Optional[str],
    timeout: Optional[int],
    binary: bool,
    stream: bool,
) -> dict[str, Any]:
    options: dict[str, Any] = {
        "url": url,
        "method": method,
        "headers": dict(parse_header(header) for header in headers),
        "json": as_json,
        "raw": stream,
    }
    if query:
        options["query"] = query
    if timeout is not None:
        options["timeout"] = timeout
    if user:
        options["auth"] = user
    if binary:
        options["encoding"] = None
    return options


def build_body(data: Optional[str], data_file: Optional[BinaryIO], as_json: bool) -> Any:
    if data_file is not None:
        return data_file.read()
    if data is None:
        return None
    if as_json:
        try:
            return json.loads(data)
        except ValueError as e:
            raise click.BadParameter(f"not valid JSON: {e}", param_hint="--data") from e
    return data


async def _run(options: dict[str, Any], body: Any, include: bool) -> Completion:
    completion = await send_request(options, body)
    error, response, _ = completion
    if response is not None and include:
        click.echo(format_status_line(response))
        click.echo(format_headers_table(response, no_color=True))
    if error is None and response is not None and options["raw"]:
        stdout = click.get_binary_stream("stdout")
        async with response:
            try:
                async for chunk in response.aiter_bytes():
                    stdout.write(chunk)
            except Exception as e:
                return Completion(e, response, None)
        stdout.flush()
    return completion


@click.command(name="request")
@click.argument("url")
@click.option("--method", "-X", default="GET", show_default=True, help="HTTP method")
@click.option("--header", "-H", "headers", multiple=True, help="Request header, 'Name: value'")
@click.option("--data", "-d", help="Request body")
@click.option("--data-file", type=click.File("rb"), help="Read the request body from a file")
@click.option("--query", "-q", help="Query string appended to the URL path")
@click.option("--json", "as_json", is_flag=True, help="Send JSON and decode the response as JSON")
@click.option("--user", "-u", help="Basic auth credentials, 'user:pass'")
@click.option("--timeout", "-t", type=click.IntRange(min=0), help="Timeout in milliseconds, 0 disables")
@click.option("--binary", is_flag=True, help="Write the response body as raw bytes")
@click.option("--stream", is_flag=True, help="Stream the body as it arrives")
@click.option("--include", "-i", is_flag=True, help="Print the status line and headers")
def request(
    url: str,
    method: str,
    headers: tuple[str, ...],
    data: Optional[str],
    data_file: Optional[BinaryIO],
    query: Optional[str],
    as_json: bool,
    user: Optional[str],
    timeout: Optional[int],
    binary: bool,
    stream: bool,
    include: bool,
) -> None:
    """Send one HTTP request to URL and print the response."""
    options = build_options(url, method, headers, query, as_json, user, timeout, binary, stream)
    body = build_body(data, data_file, as_json)

    logger.debug(f"Options: {options}")
    error, _, decoded = asyncio.run(_run(options, body, include))

    if error is not None:
        click.echo(f"Error {format_error(error)}", err=True)
        click.get_current_context().exit(1)

    if not stream:
        format_output(decoded, as_json=as_json)
