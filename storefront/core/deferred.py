"""One-shot action that waits for a downstream acknowledgement.

Used to clear the cart after checkout: the thank-you view reads the
pre-clear snapshot, then acknowledges. If nobody acknowledges, the fallback
delay fires the action anyway.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Callable

logger = logging.getLogger(__name__)


class DeferredAction:
    def __init__(self, action: Callable[[], None], delay: float):
        self._action = action
        self._delay = max(0.0, float(delay))
        self._handle: asyncio.TimerHandle | None = None
        self._done = asyncio.Event()
        self._cancelled = False

    @property
    def done(self) -> bool:
        return self._done.is_set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def start(self) -> DeferredAction:
        """Arm the fallback timer on the running loop."""
        if self._handle is None and not self.done and not self._cancelled:
            loop = asyncio.get_running_loop()
            self._handle = loop.call_later(self._delay, self._fire)
        return self

    def acknowledge(self) -> None:
        """Downstream has seen what it needs; run the action now."""
        self._fire()

    def cancel(self) -> None:
        if self.done:
            return
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    async def wait(self) -> None:
        await self._done.wait()

    def _fire(self) -> None:
        if self.done or self._cancelled:
            return
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        try:
            self._action()
        except Exception:
            logger.exception("Deferred action failed")
        finally:
            self._done.set()
