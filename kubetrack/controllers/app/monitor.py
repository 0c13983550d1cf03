"""Per-application monitor.

Each tracked application gets one asyncio task that resolves the
application id, polls the cluster for reports and drives the lifecycle
state machine, notifying an optional listener along the way.
"""

from __future__ import annotations

import asyncio
import logging

from kubetrack.constants.defaults import SESSION_STOPPED_MESSAGE
from kubetrack.constants.enums import AppLifecycleState
from kubetrack.controllers.app.errors import ApplicationKilledError
from kubetrack.controllers.app.leak_registry import LeakRegistry
from kubetrack.controllers.app.resolver import resolve_app_id
from kubetrack.controllers.base import ClusterClient
from kubetrack.controllers.cluster.fetchers.report_fetcher import ReportFetcher
from kubetrack.controllers.cluster.parsers.state_mapper import map_kubernetes_state
from kubetrack.models.core.app_info import ApplicationInfo, ProcessHandle
from kubetrack.models.core.listener import ApplicationListener
from kubetrack.models.state.app_settings import MonitorSettings
from kubetrack.utils.clock import Clock, system_clock

logger = logging.getLogger(__name__)


class ApplicationMonitor:
    """Tracks one Spark application from submission to a terminal state."""

    def __init__(
        self,
        app_tag: str,
        app_id: str | None = None,
        process: ProcessHandle | None = None,
        listener: ApplicationListener | None = None,
        *,
        client: ClusterClient,
        settings: MonitorSettings,
        leak_registry: LeakRegistry,
        clock: Clock = system_clock,
        report_fetcher: ReportFetcher | None = None,
    ) -> None:
        self.app_tag = app_tag
        self._known_app_id = app_id
        self._process = process
        self._listener = listener
        self._client = client
        self._settings = settings
        self._leak_registry = leak_registry
        self._clock = clock
        self._report_fetcher = report_fetcher or ReportFetcher(client)

        self._state = AppLifecycleState.STARTING
        self._app_info = ApplicationInfo()
        self._app_log: list[str] = []
        self._diagnostics: list[str] = []
        self._app_id_future: asyncio.Future[str] | None = None
        self._task: asyncio.Task[None] | None = None
        self._kill_lock = asyncio.Lock()

    # =========================================================================
    # Public API
    # =========================================================================

    @property
    def state(self) -> AppLifecycleState:
        return self._state

    @property
    def app_info(self) -> ApplicationInfo:
        return self._app_info

    @property
    def is_running(self) -> bool:
        return not self._state.is_terminal

    def start(self) -> ApplicationMonitor:
        """Start the monitor task on the running event loop."""
        if self._task is not None:
            return self
        self._app_id_future = asyncio.get_running_loop().create_future()
        self._task = asyncio.create_task(
            self._run(), name=f"kubernetes-app-monitor-{self.app_tag}"
        )
        return self

    async def app_id(self) -> str:
        """Wait until the application id is known.

        Raises the resolution error if the id could not be found. Cancelling
        the caller does not affect the monitor.
        """
        if self._app_id_future is None:
            raise RuntimeError("Monitor has not been started")
        return await asyncio.shield(self._app_id_future)

    def app_id_if_known(self) -> str | None:
        future = self._app_id_future
        if future is None or not future.done() or future.exception() is not None:
            return None
        return future.result()

    async def wait(self) -> None:
        """Wait for the monitor task to end."""
        if self._task is not None:
            await asyncio.wait([self._task])

    def log(self) -> list[str]:
        """Driver log, submitting process output and Kubernetes diagnostics."""
        process_lines: list[str] = []
        if self._process is not None:
            process_lines = [*self._process.input_lines, *self._process.error_lines]
        return [
            "stdout: ",
            *self._app_log,
            "\nstderr: ",
            *process_lines,
            "\nKubernetes Diagnostics: ",
            *self._diagnostics,
        ]

    async def kill(self) -> None:
        """Kill the application. Safe to call repeatedly and concurrently."""
        async with self._kill_lock:
            if self._state.is_terminal:
                return
            try:
                try:
                    await asyncio.wait_for(
                        self._client.delete_by_tag(self.app_tag),
                        timeout=self._settings.kill_timeout,
                    )
                except asyncio.TimeoutError:
                    logger.warning(
                        "Deleting a session while its Kubernetes application is not found."
                    )
                except asyncio.CancelledError:
                    logger.warning(
                        "Kill of app with tag %s was interrupted, stopping its monitor",
                        self.app_tag,
                    )
                    self._cancel_task()
                    raise
                except Exception as exc:
                    logger.warning(
                        "Failed to delete Kubernetes app with tag %s: %s", self.app_tag, exc
                    )
                await self._stop_task()
            finally:
                self._destroy_process()

    # =========================================================================
    # Monitor task
    # =========================================================================

    async def _run(self) -> None:
        try:
            try:
                app_id = self._known_app_id or await resolve_app_id(
                    self._client,
                    self.app_tag,
                    poll_interval=self._settings.poll_interval,
                    timeout=self._settings.app_lookup_timeout,
                    leak_registry=self._leak_registry,
                    process=self._process,
                    clock=self._clock,
                )
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                logger.error("Failed to resolve app with tag %s: %s", self.app_tag, exc)
                self._fail_app_id(exc)
                return

            self._resolve_app_id(app_id)
            if self._listener is not None:
                self._listener.app_id_known(app_id)

            await self._poll_until_terminal(app_id)
        except asyncio.CancelledError:
            self._diagnostics = [SESSION_STOPPED_MESSAGE]
            self._fail_app_id(ApplicationKilledError(self.app_tag))
            self._force_state(AppLifecycleState.KILLED)
        except Exception as exc:
            logger.exception("Error while refreshing Kubernetes state of app %s", self.app_tag)
            self._diagnostics = [str(exc)]
            self._fail_app_id(exc)
            self._force_state(AppLifecycleState.FAILED)

    async def _poll_until_terminal(self, app_id: str) -> None:
        while not self._state.is_terminal:
            await self._clock.sleep(self._settings.poll_interval)

            report = await self._report_fetcher.fetch_report(
                self.app_tag, self._settings.cache_log_size
            )
            self._app_log = report.log_lines
            self._diagnostics = report.diagnostics
            self._change_state(map_kubernetes_state(report.state, self.app_tag))
            self._update_info(ApplicationInfo(tracking_url=report.tracking_url))

        logger.debug("%s %s %s", app_id, self._state.name, " ".join(self._diagnostics))
        if self._settings.history_server_url:
            self._update_info(
                ApplicationInfo(
                    tracking_url=f"{self._settings.history_server_url}/history/{app_id}/jobs/"
                )
            )

    # =========================================================================
    # State machine
    # =========================================================================

    def _change_state(self, new_state: AppLifecycleState) -> None:
        old_state = self._state
        if old_state == new_state or old_state.is_terminal:
            return
        # RUNNING never falls back to STARTING
        if new_state == AppLifecycleState.STARTING:
            return
        logger.info("App %s changed state %s -> %s", self.app_tag, old_state.name, new_state.name)
        self._state = new_state
        if self._listener is not None:
            self._listener.state_changed(old_state, new_state)

    def _force_state(self, new_state: AppLifecycleState) -> None:
        try:
            self._change_state(new_state)
        except Exception:
            logger.exception("Listener failed on state change of app %s", self.app_tag)

    def _update_info(self, info: ApplicationInfo) -> None:
        if info == self._app_info:
            return
        self._app_info = info
        if self._listener is not None:
            self._listener.info_changed(info)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _resolve_app_id(self, app_id: str) -> None:
        if self._app_id_future is not None and not self._app_id_future.done():
            self._app_id_future.set_result(app_id)

    def _fail_app_id(self, exc: BaseException) -> None:
        future = self._app_id_future
        if future is None or future.done():
            return
        future.set_exception(exc)
        # Mark as retrieved; awaiters of app_id() still observe the error.
        future.exception()

    def _cancel_task(self) -> bool:
        task = self._task
        if task is None or task.done() or task is asyncio.current_task():
            return False
        task.cancel()
        return True

    async def _stop_task(self) -> None:
        if self._cancel_task():
            await asyncio.wait([self._task])
        if not self._state.is_terminal:
            # Monitor already ended (e.g. lookup timeout) or kill runs on its own task.
            self._diagnostics = [SESSION_STOPPED_MESSAGE]
            self._force_state(AppLifecycleState.KILLED)

    def _destroy_process(self) -> None:
        if self._process is None:
            return
        try:
            self._process.destroy()
        except Exception as exc:
            logger.warning("Failed to destroy submit process of app %s: %s", self.app_tag, exc)

