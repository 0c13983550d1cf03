"""All enum definitions for kubetrack.

This module consolidates all enumerations used throughout the package.
"""

from enum import Enum

# =============================================================================
# Application State Enums
# =============================================================================

class AppLifecycleState(Enum):
    """Lifecycle of a tracked application."""

    STARTING = "starting"
    RUNNING = "running"
    FINISHED = "finished"
    FAILED = "failed"
    KILLED = "killed"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATES


TERMINAL_STATES = frozenset(
    {
        AppLifecycleState.FINISHED,
        AppLifecycleState.FAILED,
        AppLifecycleState.KILLED,
    }
)


# =============================================================================
# Kubernetes Phase Enums
# =============================================================================

class KubernetesPhase(Enum):
    """Lower-cased pod phases reported for the driver pod."""

    PENDING = "pending"
    CONTAINER_CREATING = "containercreating"
    RUNNING = "running"
    COMPLETED = "completed"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    ERROR = "error"
    UNKNOWN = "unknown"


__all__ = [
    "TERMINAL_STATES",
    "AppLifecycleState",
    "KubernetesPhase",
]
