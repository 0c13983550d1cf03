"""Application monitoring: id resolution, lifecycle tracking, leak GC."""

from kubetrack.controllers.app.context import MonitorContext
from kubetrack.controllers.app.errors import (
    ApplicationKilledError,
    ApplicationLookupTimeoutError,
    KubeTrackError,
)
from kubetrack.controllers.app.leak_registry import LeakRegistry, LeakSweeper
from kubetrack.controllers.app.monitor import ApplicationMonitor
from kubetrack.controllers.app.resolver import resolve_app_id

__all__ = [
    "ApplicationKilledError",
    "ApplicationLookupTimeoutError",
    "ApplicationMonitor",
    "KubeTrackError",
    "LeakRegistry",
    "LeakSweeper",
    "MonitorContext",
    "resolve_app_id",
]
