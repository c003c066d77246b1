from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, TypedDict, Union

import httpx

from .. import _config
from ._auth import Auth, apply_basic_auth
from ._url import Port, append_query, build_url, parse_url
from .constants import (
    DEFAULT_HOSTNAME,
    DEFAULT_METHOD,
    DEFAULT_PATH,
    DEFAULT_PROTOCOL,
)


class Options(TypedDict, total=False):
    """A partial, caller-facing options record."""

    url: str
    host: str
    hostname: str
    port: Port
    path: str
    protocol: str
    query: str
    method: str
    headers: Mapping[str, Any]
    auth: Auth
    body: Any
    json: bool
    encoding: Optional[str]
    timeout: Union[int, float, str]
    raw: bool
    agent: httpx.AsyncClient


OPTION_KEYS = frozenset(Options.__annotations__)

OptionsLike = Union[str, Mapping[str, Any]]


@dataclass
class RequestOptions:
    """The canonical descriptor for one call.

    Built by :func:`normalize_options`; every field is resolved, and the
    headers dict belongs to this descriptor alone.
    """

    method: str = DEFAULT_METHOD
    protocol: str = DEFAULT_PROTOCOL
    hostname: str = DEFAULT_HOSTNAME
    port: Optional[Port] = None
    path: str = DEFAULT_PATH
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None
    json: bool = False
    encoding: Optional[str] = field(default_factory=lambda: _config.config.default_encoding)
    timeout: float = 0
    raw: bool = False
    agent: Optional[httpx.AsyncClient] = None
    url: Optional[str] = None

    @property
    def target_url(self) -> str:
        return build_url(self.protocol, self.hostname, self.port, self.path)

    @property
    def timeout_seconds(self) -> Optional[float]:
        """The per-phase timeout in seconds, or None when timing is disabled."""
        return self.timeout / 1000 if self.timeout > 0 else None


def _check_keys(options: Mapping[str, Any]) -> None:
    unknown = set(options) - OPTION_KEYS
    if unknown:
        names = ", ".join(sorted(unknown))
        raise TypeError(f"Unknown request option(s): {names}")


def _as_options(options: OptionsLike) -> Mapping[str, Any]:
    if isinstance(options, str):
        return {"url": options}
    _check_keys(options)
    return options


def _header_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ", ".join(f"{item}" for item in value)
    return f"{value}"


def copy_headers(headers: Optional[Mapping[str, Any]]) -> dict[str, str]:
    """Shallow-copy headers into a fresh dict, dropping entries set to None."""
    return {
        name: _header_value(value)
        for name, value in (headers or {}).items()
        if value is not None
    }


def _coerce_timeout(value: Any) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        return 0
    return timeout if timeout > 0 else 0


def merge_options(target: dict[str, Any], source: OptionsLike) -> dict[str, Any]:
    """Merge ``source`` into ``target`` and return ``target``.

    Field precedence:

    - ``url``: a string starting with ``/`` is appended to an existing
      ``target["url"]`` (base URL + relative path); otherwise it replaces it.
    - ``headers``: merged name by name into a fresh copy of the target's
      headers; a header set to None is removed.
    - everything else: the source value replaces the target value.
    """
    source = _as_options(source)
    for key, value in source.items():
        if key == "url" and isinstance(value, str) and value.startswith("/") and target.get("url"):
            target["url"] = f"{target['url']}{value}"
        elif key == "headers":
            headers = dict(target.get("headers") or {})
            for name, header in (value or {}).items():
                if header is None:
                    headers.pop(name, None)
                else:
                    headers[name] = header
            target["headers"] = headers
        else:
            target[key] = value
    return target


def normalize_options(options: OptionsLike) -> RequestOptions:
    """Resolve an options record (or URL string) into a RequestOptions."""
    source = _as_options(options)
    fields = dict(source)
    headers = copy_headers(source.get("headers"))

    if fields.get("url"):
        parsed = parse_url(fields["url"])
        fields.pop("host", None)
        protocol = parsed.protocol
        hostname = parsed.hostname or ""
        port = parsed.port
        path = parsed.path
    else:
        protocol = fields.get("protocol") or DEFAULT_PROTOCOL
        hostname = fields.get("hostname") or fields.get("host") or DEFAULT_HOSTNAME
        port = fields.get("port")
        path = fields.get("path") or DEFAULT_PATH

    if fields.get("query"):
        path = append_query(path, fields["query"])

    auth = fields.get("auth")
    if auth:
        apply_basic_auth(headers, auth)

    method = fields.get("method") or DEFAULT_METHOD
    timeout = fields["timeout"] if "timeout" in fields else _config.config.default_timeout

    return RequestOptions(
        method=f"{method}".upper(),
        protocol=protocol.rstrip(":"),
        hostname=hostname,
        port=port,
        path=path,
        headers=headers,
        body=fields.get("body"),
        json=bool(fields.get("json")),
        encoding=fields["encoding"] if "encoding" in fields else _config.config.default_encoding,
        timeout=_coerce_timeout(timeout),
        raw=bool(fields.get("raw")),
        agent=fields.get("agent"),
        url=fields.get("url"),
    )
