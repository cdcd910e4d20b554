"""Cooperative event loop controllers hosting the deferred runner."""

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

log = logging.getLogger(__name__)


class EventLoopController(Protocol):
    """Single-threaded loop that exits with a caller-supplied code."""

    def schedule_soon(self, callback: Callable[[], None]) -> None:
        """Queue a callback to run on the next loop iteration."""
        ...

    def run_until_exit(self) -> int:
        """Run the loop until an exit is requested and return its code."""
        ...

    def request_exit(self, code: int) -> None:
        """Ask the loop to stop, carrying code as its terminal value."""
        ...


class AsyncioLoopController:
    """Event loop controller backed by an :class:`asyncio.Runner`.

    Callbacks queued with :meth:`schedule_soon` before the loop starts run
    once it does, first scheduled first run.
    """

    def __init__(self) -> None:
        self._runner = asyncio.Runner()
        self._exit: asyncio.Future[int] | None = None

    def schedule_soon(self, callback: Callable[[], None]) -> None:
        """Queue callback with ``loop.call_soon``."""
        self._runner.get_loop().call_soon(callback)

    def request_exit(self, code: int) -> None:
        """Resolve the exit future; later requests are ignored."""
        exit_future = self._exit_future()
        if exit_future.done():
            log.debug("Ignoring exit request with code %d, loop already exiting", code)
            return
        exit_future.set_result(code)

    def run_until_exit(self) -> int:
        """Run the loop until request_exit is called, then close it."""
        with self._runner:
            return self._runner.run(self._wait_for_exit())

    async def _wait_for_exit(self) -> int:
        return await self._exit_future()

    def _exit_future(self) -> asyncio.Future[int]:
        if self._exit is None:
            self._exit = self._runner.get_loop().create_future()
        return self._exit
