"""Leaked application bookkeeping and the background sweeper.

An application "leaks" when its id could not be resolved before the lookup
deadline: the submission is failed, but the driver may still show up later.
The sweeper periodically kills such late arrivals and forgets tags that
never appear.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from contextlib import suppress

from kubetrack.constants.timeouts import SWEEPER_STOP_TIMEOUT
from kubetrack.controllers.base import ClusterClient
from kubetrack.utils.clock import Clock, system_clock

logger = logging.getLogger(__name__)


class LeakRegistry:
    """Thread-safe ``tag -> first seen timestamp`` mapping."""

    def __init__(self) -> None:
        self._entries: dict[str, float] = {}
        self._lock = threading.Lock()

    def add(self, app_tag: str, first_seen: float) -> None:
        with self._lock:
            self._entries[app_tag] = first_seen

    def remove(self, app_tag: str) -> bool:
        with self._lock:
            return self._entries.pop(app_tag, None) is not None

    def snapshot(self) -> dict[str, float]:
        """Copy of the current entries, safe to iterate while others mutate."""
        with self._lock:
            return dict(self._entries)

    def __contains__(self, app_tag: object) -> bool:
        with self._lock:
            return app_tag in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class LeakSweeper:
    """Background task that kills or evicts leaked applications."""

    def __init__(
        self,
        client: ClusterClient,
        registry: LeakRegistry,
        *,
        interval: float,
        retention: float,
        clock: Clock = system_clock,
    ) -> None:
        self._client = client
        self._registry = registry
        self._interval = interval
        self._retention = retention
        self._clock = clock
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the sweeper task; calling it again while running is a no-op."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="leaked-apps-sweeper")

    async def stop(self) -> None:
        task = self._task
        self._task = None
        if task is None or task.done():
            return
        task.cancel()
        with suppress(asyncio.CancelledError, asyncio.TimeoutError):
            await asyncio.wait_for(task, timeout=SWEEPER_STOP_TIMEOUT)

    async def _run(self) -> None:
        while True:
            try:
                await self.sweep_once()
            except Exception:
                logger.exception("Leaked application sweep failed")
            await self._clock.sleep(self._interval)

    async def sweep_once(self) -> None:
        """Run one cycle: kill leaked apps that showed up, evict stale tags."""
        entries = self._registry.snapshot()
        if not entries:
            return

        apps = await self._client.list_applications()
        now = self._clock.time()
        for app_tag, first_seen in entries.items():
            app = next((app for app in apps if app.matches_tag(app_tag)), None)
            if app is not None:
                logger.info("Kill leaked app %s", app.app_id)
                try:
                    await self._client.delete_pod(app)
                except Exception as exc:
                    logger.warning("Failed to kill leaked app %s: %s", app.app_id, exc)
                    continue
                self._registry.remove(app_tag)
            elif now - first_seen > self._retention:
                self._registry.remove(app_tag)
                logger.info("Remove leaked Kubernetes app tag %s", app_tag)
