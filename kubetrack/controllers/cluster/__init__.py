"""Init file for cluster module."""

from kubetrack.controllers.cluster.client import (
    KubectlClient,
    KubectlCommandError,
    KubectlTimeoutError,
)
from kubetrack.controllers.cluster.fetchers import ReportFetcher
from kubetrack.controllers.cluster.parsers import PodParser, map_kubernetes_state

__all__ = [
    "KubectlClient",
    "KubectlCommandError",
    "KubectlTimeoutError",
    "PodParser",
    "ReportFetcher",
    "map_kubernetes_state",
]
