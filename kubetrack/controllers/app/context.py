"""Process-wide monitoring context.

Holds the objects every monitor shares: one cluster client, the leaked
application registry and its sweeper. Build it once at startup, call
``start()`` from the process entry point and ``stop()`` on shutdown.
"""

from __future__ import annotations

import logging

from kubetrack.controllers.app.leak_registry import LeakRegistry, LeakSweeper
from kubetrack.controllers.app.monitor import ApplicationMonitor
from kubetrack.controllers.base import ClusterClient
from kubetrack.controllers.cluster.client import KubectlClient
from kubetrack.models.core.app_info import ProcessHandle
from kubetrack.models.core.listener import ApplicationListener
from kubetrack.models.state.app_settings import MonitorSettings
from kubetrack.utils.clock import Clock, system_clock

logger = logging.getLogger(__name__)


class MonitorContext:
    """Shared state for all application monitors of a process."""

    def __init__(
        self,
        settings: MonitorSettings | None = None,
        client: ClusterClient | None = None,
        clock: Clock = system_clock,
    ) -> None:
        self.settings = settings or MonitorSettings()
        self.clock = clock
        self.leak_registry = LeakRegistry()
        self._client = client
        self._sweeper: LeakSweeper | None = None

    @property
    def client(self) -> ClusterClient:
        """Cluster client, created on first use."""
        if self._client is None:
            self._client = KubectlClient(self.settings)
        return self._client

    @property
    def sweeper(self) -> LeakSweeper:
        if self._sweeper is None:
            self._sweeper = LeakSweeper(
                self.client,
                self.leak_registry,
                interval=self.settings.leak_check_interval,
                retention=self.settings.leak_check_timeout,
                clock=self.clock,
            )
        return self._sweeper

    def start(self) -> None:
        """Start the leaked application sweeper. Idempotent."""
        if not self.sweeper.running:
            logger.info(
                "Starting leaked app sweeper (interval=%ss, retention=%ss)",
                self.settings.leak_check_interval,
                self.settings.leak_check_timeout,
            )
        self.sweeper.start()

    async def stop(self) -> None:
        if self._sweeper is not None:
            await self._sweeper.stop()
        if self._client is not None:
            self._client.close()

    def track(
        self,
        app_tag: str,
        app_id: str | None = None,
        process: ProcessHandle | None = None,
        listener: ApplicationListener | None = None,
    ) -> ApplicationMonitor:
        """Start monitoring the application submitted with ``app_tag``."""
        monitor = ApplicationMonitor(
            app_tag,
            app_id,
            process,
            listener,
            client=self.client,
            settings=self.settings,
            leak_registry=self.leak_registry,
            clock=self.clock,
        )
        return monitor.start()
