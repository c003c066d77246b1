"""khttp - a small asyncio HTTP/HTTPS request client on top of httpx."""

from ._api import delete, get, head, patch, post, put, request
from ._config import Config, config
from ._defaults import Caller, defaults
from ._services import CallState, Phase, RequestController
from ._utils import Options, RequestOptions, error_code, merge_options, normalize_options
from .models.errors import (
    ConnectTimeoutError,
    KhttpError,
    RequestAbortedError,
    SocketTimeoutError,
)
from .models.response import Completion, Response

__version__ = "0.1.0"

__all__ = [
    "CallState",
    "Caller",
    "Completion",
    "Config",
    "ConnectTimeoutError",
    "KhttpError",
    "Options",
    "Phase",
    "RequestAbortedError",
    "RequestController",
    "RequestOptions",
    "Response",
    "SocketTimeoutError",
    "config",
    "defaults",
    "delete",
    "error_code",
    "get",
    "head",
    "merge_options",
    "normalize_options",
    "patch",
    "post",
    "put",
    "request",
]
