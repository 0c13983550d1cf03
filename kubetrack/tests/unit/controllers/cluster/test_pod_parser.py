"""Tests for pod diagnostics rendering."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from kubetrack.controllers.cluster.parsers.pod_parser import (
    UNKNOWN_POD_DIAGNOSTICS,
    PodParser,
)


class TestPodParser:
    """Tests for PodParser."""

    @pytest.fixture
    def parser(self) -> PodParser:
        return PodParser()

    def test_none_pod_is_unknown(self, parser: PodParser) -> None:
        """A missing pod renders as the fixed placeholder."""
        assert parser.build_pod_diagnostics(None) == "unknown"
        assert UNKNOWN_POD_DIAGNOSTICS == "unknown"

    def test_pod_block_contains_fields(
        self, parser: PodParser, pod_factory: Callable[..., dict[str, Any]]
    ) -> None:
        """The block carries identity, placement, status and container details."""
        pod = pod_factory("job-1-driver", phase="Running")
        pod["status"]["reason"] = "Scheduled"
        pod["status"]["message"] = "all good"

        text = parser.build_pod_diagnostics(pod)

        assert text.startswith("job-1-driver.spark:")
        assert "job-1-driver" in text
        assert "spark" in text
        assert "Running" in text
        assert "\tnode: node-a" in text
        assert "\thostname: job-1-driver" in text
        assert "\tpodIp: 10.0.0.12" in text
        assert "\tstartTime: 2024-01-01T00:00:00Z" in text
        assert "\treason: Scheduled" in text
        assert "\tmessage: all good" in text
        assert "spark-role=driver" in text
        assert "image: apache/spark:3.5.0" in text
        assert "requests: cpu=1, memory=1Gi" in text
        assert "limits: memory=2Gi" in text
        assert "command: /opt/entrypoint.sh driver" in text
        assert "type=Ready, status=True" in text

    def test_pod_with_sparse_data(self, parser: PodParser) -> None:
        """Pods missing spec/status still render without errors."""
        text = parser.build_pod_diagnostics({"metadata": {"name": "p", "namespace": "ns"}})

        assert text.startswith("p.ns:")
        assert "phase: None" in text

    def test_build_diagnostics_orders_executors(
        self, parser: PodParser, pod_factory: Callable[..., dict[str, Any]]
    ) -> None:
        """Driver comes first, executors follow sorted by name."""
        driver = pod_factory("job-1-driver")
        executors = [
            pod_factory("job-1-exec-2", role="executor"),
            pod_factory("job-1-exec-1", role="executor"),
        ]

        lines = parser.build_diagnostics(driver, executors)
        headers = [line for line in lines if line.endswith(".spark:")]

        assert headers == [
            "job-1-driver.spark:",
            "job-1-exec-1.spark:",
            "job-1-exec-2.spark:",
        ]

    def test_build_diagnostics_skips_missing_driver(
        self, parser: PodParser, pod_factory: Callable[..., dict[str, Any]]
    ) -> None:
        """A null driver is skipped instead of rendered."""
        lines = parser.build_diagnostics(None, [pod_factory("exec-1", role="executor")])

        assert lines[0] == "exec-1.spark:"
        assert "unknown" not in lines

    def test_build_diagnostics_empty(self, parser: PodParser) -> None:
        assert parser.build_diagnostics(None, []) == []
