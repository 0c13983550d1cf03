"""Timeout constants for kubetrack.

All timeout and interval values for cluster requests and background loops.
"""

from typing import Final

# ============================================================================
# API/Cluster timeouts (string format for kubectl)
# ============================================================================

CLUSTER_REQUEST_TIMEOUT: Final = "30s"

# Process-level command timeout (must be greater than request timeout)
KUBECTL_COMMAND_TIMEOUT: Final = 45

# ============================================================================
# Async operation timeouts (float, in seconds)
# ============================================================================

CLUSTER_CHECK_TIMEOUT: Final = 12.0
KILL_REQUEST_TIMEOUT: Final = 30.0
SWEEPER_STOP_TIMEOUT: Final = 5.0

__all__ = [
    "CLUSTER_CHECK_TIMEOUT",
    "CLUSTER_REQUEST_TIMEOUT",
    "KILL_REQUEST_TIMEOUT",
    "KUBECTL_COMMAND_TIMEOUT",
    "SWEEPER_STOP_TIMEOUT",
]
