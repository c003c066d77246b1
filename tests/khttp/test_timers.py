import asyncio
from typing import AsyncIterator

import pytest

from khttp import ConnectTimeoutError, SocketTimeoutError
from khttp._utils._timers import PhaseTimer


async def _slow(delay: float, value: str = "done") -> str:
    await asyncio.sleep(delay)
    return value


async def _drip(chunks: list[bytes], interval: float) -> AsyncIterator[bytes]:
    for chunk in chunks:
        await asyncio.sleep(interval)
        yield chunk


class TestPhaseTimer:
    @pytest.mark.anyio
    async def test_connect_within_deadline(self):
        timer = PhaseTimer(1.0)

        assert await timer.connect(_slow(0)) == "done"
        assert timer.armed == 1
        assert timer.active is None

    @pytest.mark.anyio
    async def test_connect_deadline_expires(self):
        timer = PhaseTimer(0.05)

        with pytest.raises(ConnectTimeoutError) as exc_info:
            await timer.connect(_slow(5))

        assert exc_info.value.code == "ETIMEDOUT"
        assert timer.active is None

    @pytest.mark.anyio
    async def test_disabled_timer_never_arms(self):
        timer = PhaseTimer(None)

        assert await timer.connect(_slow(0.01)) == "done"
        assert [chunk async for chunk in timer.chunks(_drip([b"a", b"b"], 0.01))] == [b"a", b"b"]
        assert timer.armed == 0
        assert timer.active is None

    @pytest.mark.anyio
    async def test_idle_deadline_resets_per_chunk(self):
        timer = PhaseTimer(0.1)
        chunks = [bytes([n]) for n in range(8)]

        received = [chunk async for chunk in timer.chunks(_drip(chunks, 0.03))]

        assert received == chunks
        # one deadline per read, including the read that ends the stream
        assert timer.armed == len(chunks) + 1

    @pytest.mark.anyio
    async def test_idle_deadline_expires(self):
        timer = PhaseTimer(0.05)
        received = []

        with pytest.raises(SocketTimeoutError) as exc_info:
            async for chunk in timer.chunks(_drip([b"a", b"b"], 0.5)):
                received.append(chunk)

        assert received == []
        assert exc_info.value.code == "ESOCKETTIMEDOUT"

    @pytest.mark.anyio
    async def test_consumer_time_is_not_counted(self):
        timer = PhaseTimer(0.05)
        received = []

        async for chunk in timer.chunks(_drip([b"a", b"b"], 0)):
            await asyncio.sleep(0.1)
            received.append(chunk)

        assert received == [b"a", b"b"]

    @pytest.mark.anyio
    async def test_only_one_deadline_at_a_time(self):
        timer = PhaseTimer(1.0)
        pending = asyncio.ensure_future(timer.connect(_slow(0.2)))
        await asyncio.sleep(0)

        second = _slow(0)
        with pytest.raises(RuntimeError):
            await timer.connect(second)
        second.close()

        assert await pending == "done"
