"""Controllers module for kubetrack.

This module provides the cluster client, report assembly and the
per-application monitors built on top of them.
"""

from __future__ import annotations

# Base classes
from kubetrack.controllers.base import BaseController, ClusterClient

# Application domain
from kubetrack.controllers.app import (
    ApplicationLookupTimeoutError,
    ApplicationMonitor,
    LeakRegistry,
    LeakSweeper,
    MonitorContext,
)

# Cluster domain
from kubetrack.controllers.cluster import KubectlClient, ReportFetcher

__all__ = [
    # Base
    "BaseController",
    "ClusterClient",
    # Application
    "ApplicationLookupTimeoutError",
    "ApplicationMonitor",
    "LeakRegistry",
    "LeakSweeper",
    "MonitorContext",
    # Cluster
    "KubectlClient",
    "ReportFetcher",
]
