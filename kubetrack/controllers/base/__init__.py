"""Base classes for cluster controllers."""

from kubetrack.controllers.base.base_controller import BaseController, ClusterClient

__all__ = ["BaseController", "ClusterClient"]
