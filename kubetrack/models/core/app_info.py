"""Application snapshot models."""

from __future__ import annotations

from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field

from kubetrack.constants.defaults import TRACKING_URL_DEFAULT
from kubetrack.constants.enums import KubernetesPhase
from kubetrack.constants.labels import SPARK_APP_ID_LABEL, SPARK_APP_TAG_LABEL


class ApplicationInfo(BaseModel):
    """Immutable UI snapshot compared by value between polls."""

    model_config = ConfigDict(frozen=True)

    tracking_url: str | None = None


class ApplicationReport(BaseModel):
    """Per-poll view of an application assembled from its pods."""

    state: str = KubernetesPhase.UNKNOWN.value
    log_lines: list[str] = Field(default_factory=list)
    diagnostics: list[str] = Field(default_factory=list)
    tracking_url: str | None = None

    @classmethod
    def unknown(cls) -> ApplicationReport:
        """Degenerate report returned when the cluster cannot be read."""
        return cls(tracking_url=TRACKING_URL_DEFAULT)


class KubernetesApplication:
    """Driver pod of a Spark application."""

    def __init__(self, driver_pod: dict[str, Any]) -> None:
        self.pod = driver_pod
        metadata = driver_pod.get("metadata") or {}
        labels = metadata.get("labels") or {}
        self.tag: str | None = labels.get(SPARK_APP_TAG_LABEL)
        self.app_id: str | None = labels.get(SPARK_APP_ID_LABEL)
        self.name: str = metadata.get("name", "")
        self.namespace: str = metadata.get("namespace", "")

    def matches_tag(self, app_tag: str) -> bool:
        return self.tag is not None and app_tag in self.tag

    def __repr__(self) -> str:
        return (
            f"KubernetesApplication(app_id={self.app_id!r}, tag={self.tag!r}, "
            f"pod={self.namespace}/{self.name})"
        )


class ProcessHandle(Protocol):
    """Submitting process as seen by the monitor."""

    @property
    def input_lines(self) -> list[str]: ...

    @property
    def error_lines(self) -> list[str]: ...

    def destroy(self) -> None: ...
