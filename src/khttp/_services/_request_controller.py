import asyncio
from dataclasses import dataclass, field
from enum import Enum
from logging import getLogger
from typing import Any, Callable, Generator, Optional

import httpx

from .._config import config
from .._utils._body_codec import EncodedBody, decode_body, prepare_body
from .._utils._request_spec import RequestOptions
from .._utils._ssl_context import get_httpx_client_kwargs
from .._utils._timers import PhaseTimer
from .._utils.constants import HEADER_CONNECTION
from ..models.errors import (
    ConnectTimeoutError,
    RequestAbortedError,
    SocketTimeoutError,
)
from ..models.response import Completion, Response

Callback = Callable[[Optional[BaseException], Optional[Response], Any], Any]


class Phase(str, Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    COMPLETED = "completed"


@dataclass
class CallState:
    """Mutable state owned by exactly one RequestController."""

    timer: PhaseTimer
    phase: Phase = Phase.IDLE
    connected: bool = False
    chunks: list[bytes] = field(default_factory=list)

    @property
    def completed(self) -> bool:
        return self.phase is Phase.COMPLETED


class RequestController:
    """Drives one request/response exchange and reports its outcome once.

    Returned by :func:`khttp.request` as the live request handle. Await it
    for a :class:`Completion`, or pass a callback that receives
    ``(error, response, body)``. Either way the outcome is produced exactly
    once: timeouts, transport errors and stream errors all funnel through
    :meth:`_complete`, and anything reported after that is ignored.
    """

    def __init__(
        self,
        options: RequestOptions,
        body: Any = None,
        callback: Optional[Callback] = None,
    ) -> None:
        self._logger = getLogger("khttp")
        self.options = options
        self.state = CallState(timer=PhaseTimer(options.timeout_seconds))
        self.request: Optional[httpx.Request] = None
        self.response: Optional[Response] = None
        self._callback = callback
        self._encoded: EncodedBody = prepare_body(options, body)

        loop = asyncio.get_running_loop()
        self._outcome: asyncio.Future[Completion] = loop.create_future()
        self._task: Optional[asyncio.Task[None]] = None

    def start(self) -> "RequestController":
        if self._task is None:
            self._task = asyncio.get_running_loop().create_task(self._run())
        return self

    def done(self) -> bool:
        return self.state.completed

    def abort(self) -> None:
        """Abort the call; completes with RequestAbortedError if still pending."""
        if self.state.completed:
            return
        self._logger.debug(f"Request aborted: {self.options.method} {self.options.target_url}")
        try:
            self._complete(RequestAbortedError(request=self))
        finally:
            self._cancel()

    def fail(self, error: BaseException) -> None:
        """Report a request-level error, as the transport would."""
        pending = not self.state.completed
        try:
            self._complete(error)
        finally:
            if pending:
                self._cancel()

    def __await__(self) -> Generator[Any, None, Completion]:
        return asyncio.shield(self._outcome).__await__()

    def _cancel(self) -> None:
        if self._task is not None and self._task is not asyncio.current_task():
            self._task.cancel()

    def _client(self) -> tuple[httpx.AsyncClient, bool]:
        if self.options.agent is not None:
            return self.options.agent, False
        return httpx.AsyncClient(**get_httpx_client_kwargs()), True

    def _on_stream_error(self, error: BaseException) -> None:
        pending = not self.state.completed
        try:
            self._complete(error, self.response)
        finally:
            # stops the body read and lets _collect close the stream
            if pending:
                self._cancel()

    async def _run(self) -> None:
        options = self.options
        state = self.state
        headers = dict(options.headers)

        client, owned = self._client()
        if owned and not any(name.lower() == "connection" for name in headers):
            headers[HEADER_CONNECTION] = "close"

        try:
            state.phase = Phase.CONNECTING
            self._logger.debug(f"Request: {options.method} {options.target_url}")
            self._logger.debug(f"HEADERS: {headers}")
            try:
                self.request = client.build_request(
                    options.method,
                    options.target_url,
                    headers=headers,
                    content=self._encoded.content,
                )
                raw = await state.timer.connect(client.send(self.request, stream=True))
            except ConnectTimeoutError as e:
                e.request = self
                self._logger.warning(f"Connect timeout after {options.timeout}ms: {options.target_url}")
                self._complete(e)
                return
            except Exception as e:
                self._complete(e)
                return

            state.connected = True
            state.phase = Phase.CONNECTED
            self.response = Response(
                raw,
                request=self,
                idle_timeout=options.timeout_seconds,
                client=client if owned and options.raw else None,
            )
            self.response.on_error(self._on_stream_error)
            self._logger.debug(f"Response: {raw.status_code} {options.target_url}")

            if options.raw:
                # the response now owns the stream and the one-shot client
                owned = False
                self._complete(None, self.response)
                return

            await self._collect(raw)
        finally:
            if owned:
                await client.aclose()

    async def _collect(self, raw: httpx.Response) -> None:
        state = self.state
        try:
            async for chunk in state.timer.chunks(raw.aiter_bytes()):
                state.chunks.append(chunk)
            content = b"".join(state.chunks)
            body = decode_body(content, self.options.json, self.options.encoding)
        except SocketTimeoutError as e:
            e.request = self
            self._logger.warning(f"Data timeout after {self.options.timeout}ms: {self.options.target_url}")
            self._complete(e)
            return
        except Exception as e:
            self._complete(e, self.response)
            return
        finally:
            await raw.aclose()

        assert self.response is not None
        self.response.content = content
        self.response.body = body
        self._complete(None, self.response, body)

    def _complete(
        self,
        error: Optional[BaseException],
        response: Optional[Response] = None,
        body: Any = None,
    ) -> None:
        first = not self.state.completed
        if not first and not config.allow_duplicate_callbacks:
            self._logger.debug(f"Ignoring outcome after completion: {error!r}")
            return

        self.state.phase = Phase.COMPLETED
        self.state.timer.disarm()
        if first:
            self._logger.debug(
                f"Completed: {self.options.method} {self.options.target_url} error={error!r}"
            )
            self._outcome.set_result(Completion(error, response, body))
        if self._callback is not None:
            self._callback(error, response, body)
