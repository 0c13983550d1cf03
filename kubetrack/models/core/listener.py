"""Listener hooks for application lifecycle events."""

from __future__ import annotations

from kubetrack.constants.enums import AppLifecycleState
from kubetrack.models.core.app_info import ApplicationInfo


class ApplicationListener:
    """Receives lifecycle events from an ApplicationMonitor.

    Every hook is optional; subclasses override the ones they care about.
    Hooks run on the monitor's own task, in order.
    """

    def app_id_known(self, app_id: str) -> None:
        pass

    def state_changed(
        self, old_state: AppLifecycleState, new_state: AppLifecycleState
    ) -> None:
        pass

    def info_changed(self, info: ApplicationInfo) -> None:
        pass
