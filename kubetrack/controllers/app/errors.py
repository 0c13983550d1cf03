"""Exceptions raised by application monitors."""

from __future__ import annotations


class KubeTrackError(Exception):
    """Base exception for kubetrack."""


class ApplicationLookupTimeoutError(KubeTrackError):
    """No application carrying the tag appeared before the lookup deadline."""

    def __init__(self, app_tag: str, timeout: float) -> None:
        self.app_tag = app_tag
        self.timeout = timeout
        super().__init__(
            f"No Kubernetes application is found with tag {app_tag} in {timeout:g} seconds. "
            "This may be because 1) spark-submit failed to submit the application to "
            "Kubernetes; or 2) the Kubernetes cluster doesn't have enough resources to "
            "start the application in time. Please check the service and Kubernetes logs "
            "for details."
        )


class ApplicationKilledError(KubeTrackError):
    """The monitor was stopped before the application id was resolved."""

    def __init__(self, app_tag: str) -> None:
        self.app_tag = app_tag
        super().__init__(f"Monitoring of application with tag {app_tag} was stopped by user.")
