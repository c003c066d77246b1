from typing import Any, Optional

from .._utils.constants import (
    ERROR_ABORTED,
    ERROR_CONNECT_TIMEOUT,
    ERROR_SOCKET_TIMEOUT,
)


class KhttpError(Exception):
    """Base class for errors raised by the request lifecycle itself.

    Transport failures (DNS, refused connections, resets) are not wrapped:
    they reach the caller as the original httpx exception.
    """

    code: str = ""

    def __init__(self, message: str, request: Optional[Any] = None):
        self.message = message
        self.request = request
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.message} ({self.code})" if self.code else self.message


class ConnectTimeoutError(KhttpError):
    """No response headers arrived within the timeout."""

    code = ERROR_CONNECT_TIMEOUT

    def __init__(self, message: str = "connect timeout", request: Optional[Any] = None):
        super().__init__(message, request)


class SocketTimeoutError(KhttpError):
    """The response stream went idle for longer than the timeout."""

    code = ERROR_SOCKET_TIMEOUT

    def __init__(self, message: str = "data timeout", request: Optional[Any] = None):
        super().__init__(message, request)


class RequestAbortedError(KhttpError):
    code = ERROR_ABORTED

    def __init__(self, message: str = "request aborted", request: Optional[Any] = None):
        super().__init__(message, request)
