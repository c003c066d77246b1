"""Request body encoding and response body decoding."""

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from .constants import (
    CONTENT_TYPE_JSON,
    HEADER_CONTENT_LENGTH,
    HEADER_CONTENT_TYPE,
)

if TYPE_CHECKING:
    from ._request_spec import RequestOptions

logger = logging.getLogger(__name__)

BYTES_TYPES = (bytes, bytearray, memoryview)


@dataclass(frozen=True)
class EncodedBody:
    content: bytes
    is_json: bool = False

    @property
    def length(self) -> int:
        return len(self.content)


def _is_structured(value: Any) -> bool:
    return value is not None and not isinstance(value, (bool, int, float, complex))


def _try_json_encode(value: Any) -> str:
    try:
        return json.dumps(value, separators=(",", ":"))
    except (TypeError, ValueError, RecursionError) as e:
        logger.debug(f"Body is not JSON serializable, sending str() instead: {e}")
        return f"{value}"


def encode_body(value: Any, as_json: bool = False) -> EncodedBody:
    """Turn a request payload into bytes.

    Strings and byte buffers go out unchanged. Other values are JSON encoded
    when ``as_json`` is set or when they are structured (anything but None,
    booleans and numbers); values that refuse serialization fall back to
    ``str()``. Everything else is sent as ``str(value)``.
    """
    if isinstance(value, str):
        return EncodedBody(value.encode("utf-8", errors="replace"))
    if isinstance(value, BYTES_TYPES):
        return EncodedBody(bytes(value))
    if as_json or _is_structured(value):
        return EncodedBody(_try_json_encode(value).encode("utf-8", errors="replace"), is_json=True)
    return EncodedBody(f"{value}".encode("utf-8"))


def prepare_body(options: "RequestOptions", body: Any = None) -> EncodedBody:
    """Encode the payload for ``options`` and set its body headers.

    The positional ``body`` wins over ``options.body``; with neither, the
    body is empty. Content-Length always reflects the encoded bytes.
    """
    if body is None:
        body = options.body if options.body is not None else ""

    encoded = encode_body(body, options.json)

    headers = options.headers
    if encoded.is_json and not any(name.lower() == "content-type" for name in headers):
        headers[HEADER_CONTENT_TYPE] = CONTENT_TYPE_JSON
    for name in [name for name in headers if name.lower() == "content-length"]:
        del headers[name]
    headers[HEADER_CONTENT_LENGTH] = f"{encoded.length}"
    return encoded


def decode_body(content: bytes, as_json: bool = False, encoding: Optional[str] = "utf-8") -> Any:
    """Convert accumulated response bytes into the value the caller asked for.

    Raises:
        LookupError: if ``encoding`` names an unknown codec.
    """
    if as_json:
        try:
            return json.loads(content)
        except ValueError:
            return content.decode("utf-8", errors="replace")
    if encoding is None:
        return content
    return content.decode(encoding, errors="replace")
