import httpx

from ..models.errors import KhttpError


def error_code(error: BaseException) -> str:
    """Short code for an error delivered through the completion path.

    khttp's own errors carry a code (``ETIMEDOUT``, ``ESOCKETTIMEDOUT``,
    ``ECONNRESET``); transport errors are identified by their class name.
    """
    if isinstance(error, KhttpError):
        return error.code
    return type(error).__name__


def format_error(error: BaseException) -> str:
    """Render an error as ``[CODE] message`` for display."""
    message = error.message if isinstance(error, KhttpError) else str(error)
    if isinstance(error, httpx.RequestError) and not message:
        message = "transport error"
    return f"[{error_code(error)}] {message or type(error).__name__}"
