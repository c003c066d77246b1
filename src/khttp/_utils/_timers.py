import asyncio
from typing import AsyncIterator, Awaitable, Optional, TypeVar

from ..models.errors import ConnectTimeoutError, SocketTimeoutError

T = TypeVar("T")

PHASE_CONNECT = "connect"
PHASE_DATA = "data"


class PhaseTimer:
    """Connect-phase and data-phase deadlines for a single exchange.

    At most one deadline is armed at a time. With ``seconds`` set to None
    nothing is ever armed and the phases may take arbitrarily long.
    """

    def __init__(self, seconds: Optional[float]) -> None:
        self.seconds = seconds
        self.phase: Optional[str] = None
        self.active: Optional[asyncio.Timeout] = None
        self.armed = 0

    def _arm(self, phase: str) -> asyncio.Timeout:
        if self.active is not None:
            raise RuntimeError(f"{self.phase} timer is still armed")
        timeout = asyncio.timeout(self.seconds)
        self.phase = phase
        if self.seconds is not None:
            self.active = timeout
            self.armed += 1
        return timeout

    def disarm(self) -> None:
        # leaving the asyncio.timeout block already cancelled its deadline
        self.active = None

    async def connect(self, send: Awaitable[T]) -> T:
        """Await ``send`` within the connect-phase deadline.

        Raises:
            ConnectTimeoutError: if the deadline expires first; ``send`` is
                cancelled.
        """
        timeout = self._arm(PHASE_CONNECT)
        try:
            async with timeout:
                return await send
        except TimeoutError as e:
            if not timeout.expired():
                raise
            raise ConnectTimeoutError() from e
        finally:
            self.disarm()

    async def chunks(self, source: AsyncIterator[bytes]) -> AsyncIterator[bytes]:
        """Yield chunks from ``source``, re-arming the idle deadline per read.

        The deadline only covers waiting on the transport, never the time the
        consumer spends between chunks.

        Raises:
            SocketTimeoutError: if a read stays idle past the deadline.
        """
        while True:
            timeout = self._arm(PHASE_DATA)
            try:
                async with timeout:
                    chunk = await anext(source)
            except StopAsyncIteration:
                return
            except TimeoutError as e:
                if not timeout.expired():
                    raise
                raise SocketTimeoutError() from e
            finally:
                self.disarm()
            yield chunk
