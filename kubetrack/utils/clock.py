"""Clock abstraction so polling loops can be driven deterministically."""

from __future__ import annotations

import asyncio
import time


class Clock:
    """Wall clock, monotonic clock and async sleep in one seam."""

    def time(self) -> float:
        return time.time()

    def monotonic(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


system_clock = Clock()
