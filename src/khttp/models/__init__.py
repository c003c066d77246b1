from .errors import (
    ConnectTimeoutError,
    KhttpError,
    RequestAbortedError,
    SocketTimeoutError,
)

__all__ = [
    "ConnectTimeoutError",
    "KhttpError",
    "RequestAbortedError",
    "SocketTimeoutError",
]
