"""Shared fixtures for kubetrack tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from kubetrack.constants.enums import AppLifecycleState
from kubetrack.controllers.base import ClusterClient
from kubetrack.models.core.app_info import ApplicationInfo, KubernetesApplication
from kubetrack.models.core.listener import ApplicationListener
from kubetrack.utils.clock import Clock


class FakeClock(Clock):
    """Clock whose sleeps advance virtual time instantly."""

    def __init__(self, start_time: float = 1_700_000_000.0) -> None:
        self.now = start_time
        self.mono = 0.0
        self.sleeps: list[float] = []

    def time(self) -> float:
        return self.now

    def monotonic(self) -> float:
        return self.mono

    def advance(self, seconds: float) -> None:
        self.now += seconds
        self.mono += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.advance(seconds)
        await asyncio.sleep(0)


class FakeClusterClient(ClusterClient):
    """In-memory cluster client.

    ``applications`` and ``pods`` are lists of per-call results; the last
    result repeats once the list is exhausted.
    """

    def __init__(
        self,
        applications: list[list[KubernetesApplication]] | None = None,
        pods: list[list[dict[str, Any]]] | None = None,
        log_lines: list[str] | None = None,
    ) -> None:
        self.applications = applications or [[]]
        self.pods = pods or [[]]
        self.log_lines = log_lines if log_lines is not None else ["line 1", "line 2"]
        self.list_applications_calls = 0
        self.list_pods_calls: list[dict[str, str]] = []
        self.deleted_tags: list[str] = []
        self.deleted_pods: list[KubernetesApplication] = []
        self.delete_by_tag_hook: Callable[[str], Any] | None = None
        self.tail_log_error: Exception | None = None

    async def check_connection(self) -> bool:
        return True

    async def list_applications(self) -> list[KubernetesApplication]:
        index = min(self.list_applications_calls, len(self.applications) - 1)
        self.list_applications_calls += 1
        return list(self.applications[index])

    async def list_pods(self, labels: dict[str, str]) -> list[dict[str, Any]]:
        index = min(len(self.list_pods_calls), len(self.pods) - 1)
        self.list_pods_calls.append(dict(labels))
        return list(self.pods[index])

    async def tail_log(self, pod: dict[str, Any], max_lines: int) -> list[str]:
        if self.tail_log_error is not None:
            raise self.tail_log_error
        return self.log_lines[-max_lines:]

    async def delete_by_tag(self, app_tag: str) -> bool:
        self.deleted_tags.append(app_tag)
        if self.delete_by_tag_hook is not None:
            return await self.delete_by_tag_hook(app_tag)
        return True

    async def delete_pod(self, app: KubernetesApplication) -> bool:
        self.deleted_pods.append(app)
        return True


class RecordingListener(ApplicationListener):
    """Listener that records every event it receives."""

    def __init__(self) -> None:
        self.app_ids: list[str] = []
        self.states: list[tuple[AppLifecycleState, AppLifecycleState]] = []
        self.infos: list[ApplicationInfo] = []

    def app_id_known(self, app_id: str) -> None:
        self.app_ids.append(app_id)

    def state_changed(
        self, old_state: AppLifecycleState, new_state: AppLifecycleState
    ) -> None:
        self.states.append((old_state, new_state))

    def info_changed(self, info: ApplicationInfo) -> None:
        self.infos.append(info)


class FakeProcess:
    """Submitting process stand-in."""

    def __init__(self) -> None:
        self.input_lines = ["submitted"]
        self.error_lines = ["warning: something"]
        self.destroy_count = 0

    def destroy(self) -> None:
        self.destroy_count += 1


def make_pod(
    name: str,
    *,
    role: str = "driver",
    app_tag: str = "job-1",
    app_id: str | None = "spark-0001",
    phase: str = "Running",
    namespace: str = "spark",
    extra_labels: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Build a raw pod dictionary shaped like ``kubectl get pods -o json`` items."""
    labels = {"spark-role": role, "spark-app-tag": app_tag}
    if app_id is not None:
        labels["spark-app-selector"] = app_id
    labels.update(extra_labels or {})
    return {
        "metadata": {"name": name, "namespace": namespace, "labels": labels},
        "spec": {
            "nodeName": "node-a",
            "hostname": name,
            "containers": [
                {
                    "name": f"spark-kubernetes-{role}",
                    "image": "apache/spark:3.5.0",
                    "resources": {
                        "requests": {"cpu": "1", "memory": "1Gi"},
                        "limits": {"memory": "2Gi"},
                    },
                    "command": ["/opt/entrypoint.sh"],
                    "args": [role],
                }
            ],
        },
        "status": {
            "podIP": "10.0.0.12",
            "startTime": "2024-01-01T00:00:00Z",
            "phase": phase,
            "conditions": [{"type": "Ready", "status": "True"}],
        },
    }


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cluster_client() -> FakeClusterClient:
    return FakeClusterClient()


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def process() -> FakeProcess:
    return FakeProcess()


@pytest.fixture
def pod_factory() -> Callable[..., dict[str, Any]]:
    return make_pod


@pytest.fixture
def app_factory() -> Callable[..., KubernetesApplication]:
    def _make_app(name: str = "job-1-driver", **kwargs: Any) -> KubernetesApplication:
        return KubernetesApplication(make_pod(name, **kwargs))

    return _make_app
