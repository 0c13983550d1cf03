"""Resolves an application tag to its Kubernetes application id."""

from __future__ import annotations

import logging

from kubetrack.controllers.app.errors import ApplicationLookupTimeoutError
from kubetrack.controllers.app.leak_registry import LeakRegistry
from kubetrack.controllers.base import ClusterClient
from kubetrack.models.core.app_info import ProcessHandle
from kubetrack.utils.clock import Clock, system_clock

logger = logging.getLogger(__name__)


async def resolve_app_id(
    client: ClusterClient,
    app_tag: str,
    *,
    poll_interval: float,
    timeout: float,
    leak_registry: LeakRegistry,
    process: ProcessHandle | None = None,
    clock: Clock = system_clock,
) -> str:
    """Poll the cluster until an application with ``app_tag`` shows up.

    If the tag is not unique the first application found wins. When the
    deadline passes the submitting process is destroyed, the tag is recorded
    as leaked and ApplicationLookupTimeoutError is raised.
    """
    deadline = clock.monotonic() + timeout
    while True:
        try:
            apps = await client.list_applications()
        except Exception as exc:
            logger.warning("Failed to list applications while resolving tag %s: %s", app_tag, exc)
            apps = []

        for app in apps:
            if app.matches_tag(app_tag) and app.app_id:
                return app.app_id

        if clock.monotonic() >= deadline:
            break
        await clock.sleep(poll_interval)

    leak_registry.add(app_tag, clock.time())
    if process is not None:
        try:
            process.destroy()
        except Exception as exc:
            logger.warning("Failed to destroy submit process of app %s: %s", app_tag, exc)
    raise ApplicationLookupTimeoutError(app_tag, timeout)
