"""Pod parser for the report fetcher - renders pods as diagnostics text."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

UNKNOWN_POD_DIAGNOSTICS = "unknown"


class PodParser:
    """Renders raw pod dictionaries into human-readable diagnostics."""

    @staticmethod
    def _format_map(values: Mapping[str, Any] | None) -> str:
        """Format a mapping as ``key=value, key=value``."""
        if not values:
            return ""
        return ", ".join(f"{key}={value}" for key, value in values.items())

    @staticmethod
    def _format_command(container: Mapping[str, Any]) -> str:
        parts = [*(container.get("command") or []), *(container.get("args") or [])]
        return " ".join(str(part) for part in parts)

    def _format_container(self, container: Mapping[str, Any]) -> str:
        resources = container.get("resources") or {}
        return (
            f"{container.get('name')}:"
            f"\n\t\t\timage: {container.get('image')}"
            f"\n\t\t\trequests: {self._format_map(resources.get('requests'))}"
            f"\n\t\t\tlimits: {self._format_map(resources.get('limits'))}"
            f"\n\t\t\tcommand: {self._format_command(container)}"
        )

    def build_pod_diagnostics(self, pod: Mapping[str, Any] | None) -> str:
        """Render one pod as a multi-line diagnostics block.

        Args:
            pod: Raw pod dictionary from the API, or None

        Returns:
            Diagnostics text, or ``"unknown"`` when no pod is given.
        """
        if pod is None:
            return UNKNOWN_POD_DIAGNOSTICS

        metadata = pod.get("metadata") or {}
        spec = pod.get("spec") or {}
        status = pod.get("status") or {}

        containers = "\n\t\t".join(
            self._format_container(container) for container in spec.get("containers") or []
        )
        conditions = "\n\t\t".join(
            self._format_map(condition) for condition in status.get("conditions") or []
        )

        return (
            f"{metadata.get('name')}.{metadata.get('namespace')}:"
            f"\n\tnode: {spec.get('nodeName')}"
            f"\n\thostname: {spec.get('hostname')}"
            f"\n\tpodIp: {status.get('podIP')}"
            f"\n\tstartTime: {status.get('startTime')}"
            f"\n\tphase: {status.get('phase')}"
            f"\n\treason: {status.get('reason')}"
            f"\n\tmessage: {status.get('message')}"
            f"\n\tlabels: {self._format_map(metadata.get('labels'))}"
            f"\n\tcontainers:"
            f"\n\t\t{containers}"
            f"\n\tconditions:"
            f"\n\t\t{conditions}"
        )

    def build_diagnostics(
        self,
        driver: Mapping[str, Any] | None,
        executors: Iterable[Mapping[str, Any]],
    ) -> list[str]:
        """Diagnostics lines for the driver followed by executors sorted by name."""
        sorted_executors = sorted(
            executors, key=lambda pod: (pod.get("metadata") or {}).get("name") or ""
        )
        pods = [pod for pod in (driver, *sorted_executors) if pod is not None]
        text = "\n".join(self.build_pod_diagnostics(pod) for pod in pods)
        return text.split("\n") if text else []
