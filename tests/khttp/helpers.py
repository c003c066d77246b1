import asyncio
import json
from typing import AsyncIterator

import httpx


def echo(request: httpx.Request) -> httpx.Response:
    """Describe the received request back to the caller as JSON."""
    return httpx.Response(
        200,
        json={
            "url": request.url.raw_path.decode("ascii"),
            "method": request.method,
            "headers": dict(request.headers),
            "body": request.content.decode("utf-8"),
        },
    )


def echoed(body: str) -> dict:
    return json.loads(body)


class DripStream(httpx.AsyncByteStream):
    """Yields ``chunks`` with ``interval`` seconds of silence before each one."""

    def __init__(self, chunks: list[bytes], interval: float) -> None:
        self.chunks = chunks
        self.interval = interval
        self.closed = False

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for chunk in self.chunks:
            await asyncio.sleep(self.interval)
            yield chunk

    async def aclose(self) -> None:
        self.closed = True


class StalledStream(httpx.AsyncByteStream):
    """Sends one chunk, then goes quiet for ``stall`` seconds."""

    def __init__(self, first: bytes = b"{", stall: float = 5.0) -> None:
        self.first = first
        self.stall = stall
        self.closed = False

    async def __aiter__(self) -> AsyncIterator[bytes]:
        yield self.first
        await asyncio.sleep(self.stall)
        yield b"}"

    async def aclose(self) -> None:
        self.closed = True


class BrokenStream(httpx.AsyncByteStream):
    """Sends one chunk, then fails like a connection reset mid-body."""

    async def __aiter__(self) -> AsyncIterator[bytes]:
        yield b"partial"
        raise httpx.ReadError("connection reset by peer")
