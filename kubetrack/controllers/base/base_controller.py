"""Base controller for kubetrack cluster access.

This module defines the capability every cluster backend offers to the
monitors and the leak sweeper. Implementations must be safe to share
between concurrently running tasks and hold no per-request state.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from kubetrack.models.core.app_info import KubernetesApplication

logger = logging.getLogger(__name__)


class BaseController(ABC):
    """Base controller class for cluster data sources."""

    @abstractmethod
    async def check_connection(self) -> bool:
        """Check if the data source is available.

        Returns:
            True if connection is available, False otherwise
        """
        ...


class ClusterClient(BaseController):
    """Cluster operations needed to supervise Spark applications.

    Every call is an independent request; callers may retry freely.
    """

    @abstractmethod
    async def list_applications(self) -> list[KubernetesApplication]:
        """List driver pods carrying both the tag and the id labels."""
        ...

    @abstractmethod
    async def list_pods(self, labels: dict[str, str]) -> list[dict[str, Any]]:
        """List raw pods in any namespace matching all given labels."""
        ...

    @abstractmethod
    async def tail_log(self, pod: dict[str, Any], max_lines: int) -> list[str]:
        """Return the last ``max_lines`` lines of a pod's log."""
        ...

    @abstractmethod
    async def delete_by_tag(self, app_tag: str) -> bool:
        """Delete the driver pod(s) of the application with ``app_tag``."""
        ...

    @abstractmethod
    async def delete_pod(self, app: KubernetesApplication) -> bool:
        """Delete the driver pod of a resolved application."""
        ...

    def close(self) -> None:
        """Release local resources held by the client."""
