"""Constants module for kubetrack.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- labels.py: Pod label keys
- timeouts.py: Request and loop timeouts
- defaults.py: Settings defaults
"""

from kubetrack.constants.enums import (
    TERMINAL_STATES,
    AppLifecycleState,
    KubernetesPhase,
)

__all__ = [
    "TERMINAL_STATES",
    "AppLifecycleState",
    "KubernetesPhase",
]
