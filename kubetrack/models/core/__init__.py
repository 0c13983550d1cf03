"""Core application models."""

from kubetrack.models.core.app_info import (
    ApplicationInfo,
    ApplicationReport,
    KubernetesApplication,
    ProcessHandle,
)
from kubetrack.models.core.listener import ApplicationListener

__all__ = [
    "ApplicationInfo",
    "ApplicationListener",
    "ApplicationReport",
    "KubernetesApplication",
    "ProcessHandle",
]
