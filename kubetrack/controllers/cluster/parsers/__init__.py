"""Parsers for raw pod data."""

from kubetrack.controllers.cluster.parsers.pod_parser import (
    UNKNOWN_POD_DIAGNOSTICS,
    PodParser,
)
from kubetrack.controllers.cluster.parsers.state_mapper import map_kubernetes_state

__all__ = ["UNKNOWN_POD_DIAGNOSTICS", "PodParser", "map_kubernetes_state"]
