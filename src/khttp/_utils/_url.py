from typing import NamedTuple, Optional, Union
from urllib.parse import urlsplit

from .constants import DEFAULT_PATH

Port = Union[int, str]


class ParsedUrl(NamedTuple):
    protocol: str
    hostname: Optional[str]
    port: Optional[Port]
    path: str


def parse_url(url: str) -> ParsedUrl:
    """Split a URL into the pieces the transport needs.

    The path keeps its query string, the way it goes out on the request line.
    A malformed port is kept as text so that the failure surfaces from the
    transport instead of from option handling.
    """
    parts = urlsplit(url)

    port: Optional[Port]
    try:
        port = parts.port
    except ValueError:
        port = parts.netloc.rpartition(":")[2]

    path = parts.path or DEFAULT_PATH
    if parts.query:
        path = f"{path}?{parts.query}"

    return ParsedUrl(
        protocol=parts.scheme,
        hostname=parts.hostname,
        port=port,
        path=path,
    )


def append_query(path: str, query: str) -> str:
    separator = "&" if "?" in path else "?"
    return f"{path}{separator}{query}"


def build_url(protocol: str, hostname: str, port: Optional[Port], path: str) -> str:
    if ":" in hostname and not hostname.startswith("["):
        hostname = f"[{hostname}]"
    netloc = hostname if port in (None, "") else f"{hostname}:{port}"
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{protocol}://{netloc}{path}"
