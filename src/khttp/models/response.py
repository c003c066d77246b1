import logging
from typing import Any, AsyncIterator, Callable, NamedTuple, Optional

import httpx

from .._utils._timers import PhaseTimer
from .errors import SocketTimeoutError

logger = logging.getLogger(__name__)

ErrorListener = Callable[[BaseException], None]


class Response:
    """Response metadata with a ``body`` slot filled in on completion.

    In raw mode the body is left unread: consume it with :meth:`aiter_bytes`
    or :meth:`aread`, and close the response when done. Stream failures in
    that mode are raised from the iterator and published to ``on_error``
    listeners.
    """

    def __init__(
        self,
        raw: httpx.Response,
        *,
        request: Optional[Any] = None,
        idle_timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.raw = raw
        self.request = request
        self.content: Optional[bytes] = None
        self.body: Any = None
        self.error: Optional[BaseException] = None
        self._timer = PhaseTimer(idle_timeout)
        self._client = client
        self._error_listeners: list[ErrorListener] = []

    @property
    def status_code(self) -> int:
        return self.raw.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.raw.headers

    @property
    def http_version(self) -> str:
        return self.raw.http_version

    @property
    def reason_phrase(self) -> str:
        return self.raw.reason_phrase

    @property
    def url(self) -> httpx.URL:
        return self.raw.url

    @property
    def is_closed(self) -> bool:
        return self.raw.is_closed

    def on_error(self, listener: ErrorListener) -> None:
        self._error_listeners.append(listener)

    def fail(self, error: BaseException) -> None:
        """Report a stream-level error on this response."""
        self.error = error
        for listener in list(self._error_listeners):
            listener(error)

    async def aiter_bytes(self) -> AsyncIterator[bytes]:
        try:
            async for chunk in self._timer.chunks(self.raw.aiter_bytes()):
                yield chunk
        except SocketTimeoutError as e:
            e.request = self.request
            logger.warning(f"Response stream idle for more than {self._timer.seconds}s")
            await self.aclose()
            self.fail(e)
            raise
        except httpx.HTTPError as e:
            logger.debug(f"Response stream failed: {e!r}")
            await self.aclose()
            self.fail(e)
            raise

    async def aread(self) -> bytes:
        self.content = b"".join([chunk async for chunk in self.aiter_bytes()])
        return self.content

    async def aclose(self) -> None:
        await self.raw.aclose()
        if self._client is not None:
            client, self._client = self._client, None
            await client.aclose()

    async def __aenter__(self) -> "Response":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"<Response [{self.status_code} {self.reason_phrase}]>"


class Completion(NamedTuple):
    """The single outcome of a call: ``(error, response, body)``."""

    error: Optional[BaseException]
    response: Optional[Response]
    body: Any
