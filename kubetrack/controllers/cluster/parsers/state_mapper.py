"""Maps Kubernetes pod phases onto application lifecycle states."""

from __future__ import annotations

import logging

from kubetrack.constants.enums import AppLifecycleState, KubernetesPhase

logger = logging.getLogger(__name__)

_PHASE_TO_STATE: dict[str, AppLifecycleState] = {
    KubernetesPhase.PENDING.value: AppLifecycleState.STARTING,
    KubernetesPhase.CONTAINER_CREATING.value: AppLifecycleState.STARTING,
    "container-creating": AppLifecycleState.STARTING,
    KubernetesPhase.RUNNING.value: AppLifecycleState.RUNNING,
    KubernetesPhase.COMPLETED.value: AppLifecycleState.FINISHED,
    KubernetesPhase.SUCCEEDED.value: AppLifecycleState.FINISHED,
    KubernetesPhase.FAILED.value: AppLifecycleState.FAILED,
    KubernetesPhase.ERROR.value: AppLifecycleState.FAILED,
}


def map_kubernetes_state(phase: str | None, app_tag: str = "") -> AppLifecycleState:
    """Map a pod phase (any case) to an AppLifecycleState.

    Unknown phases fail the application rather than being treated as running.
    """
    state = _PHASE_TO_STATE.get((phase or "").lower())
    if state is None:
        logger.warning("Unknown Kubernetes state %s for app with tag %s.", phase, app_tag)
        return AppLifecycleState.FAILED
    return state
