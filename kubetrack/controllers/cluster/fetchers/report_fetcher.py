"""Report fetcher for application monitors - assembles per-poll reports from pods."""

from __future__ import annotations

import logging
import traceback
from typing import Any

from kubetrack.constants.defaults import TRACKING_URL_DEFAULT
from kubetrack.constants.enums import KubernetesPhase
from kubetrack.constants.labels import (
    SPARK_APP_TAG_LABEL,
    SPARK_ROLE_DRIVER,
    SPARK_ROLE_EXECUTOR,
    SPARK_ROLE_LABEL,
    SPARK_UI_URL_LABEL,
)
from kubetrack.controllers.base import ClusterClient
from kubetrack.controllers.cluster.parsers.pod_parser import PodParser
from kubetrack.models.core.app_info import ApplicationReport

logger = logging.getLogger(__name__)


def _pod_labels(pod: dict[str, Any]) -> dict[str, str]:
    return (pod.get("metadata") or {}).get("labels") or {}


class ReportFetcher:
    """Builds ApplicationReports for a tag.

    ``fetch_report`` never raises: any failure to read the cluster turns into
    a degenerate report with an ``unknown`` state.
    """

    def __init__(self, client: ClusterClient, parser: PodParser | None = None) -> None:
        self._client = client
        self._parser = parser or PodParser()

    async def fetch_log(self, pod: dict[str, Any], cache_log_size: int) -> list[str]:
        """Tail the pod log; failures are returned as log text."""
        try:
            return await self._client.tail_log(pod, cache_log_size)
        except Exception as exc:
            lines = [repr(exc)]
            for frame in traceback.format_tb(exc.__traceback__):
                lines.extend(frame.rstrip("\n").split("\n"))
            return lines

    async def fetch_report(self, app_tag: str, cache_log_size: int) -> ApplicationReport:
        try:
            pods = await self._client.list_pods({SPARK_APP_TAG_LABEL: app_tag})
        except Exception as exc:
            logger.debug("Failed to list pods for tag %s: %s", app_tag, exc)
            return ApplicationReport.unknown()

        driver = next(
            (pod for pod in pods if _pod_labels(pod).get(SPARK_ROLE_LABEL) == SPARK_ROLE_DRIVER),
            None,
        )
        if driver is None:
            logger.debug("No driver pod found for tag %s", app_tag)
            return ApplicationReport.unknown()

        executors = [
            pod for pod in pods if _pod_labels(pod).get(SPARK_ROLE_LABEL) == SPARK_ROLE_EXECUTOR
        ]
        log_lines = await self.fetch_log(driver, cache_log_size)

        try:
            diagnostics = self._parser.build_diagnostics(driver, executors)
        except Exception:
            logger.exception("Failed to build diagnostics for tag %s", app_tag)
            diagnostics = []

        phase = (driver.get("status") or {}).get("phase")
        return ApplicationReport(
            state=str(phase).lower() if phase else KubernetesPhase.UNKNOWN.value,
            log_lines=log_lines,
            diagnostics=diagnostics,
            tracking_url=_pod_labels(driver).get(SPARK_UI_URL_LABEL, TRACKING_URL_DEFAULT),
        )
