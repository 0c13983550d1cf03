"""kubectl-backed cluster client.

Runs kubectl in worker threads so the event loop stays responsive while
monitors and the leak sweeper query the cluster concurrently.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import subprocess
import tempfile
import threading
from pathlib import Path
from typing import Any

import yaml

from kubetrack.constants.labels import (
    SPARK_APP_ID_LABEL,
    SPARK_APP_TAG_LABEL,
    SPARK_ROLE_DRIVER,
    SPARK_ROLE_LABEL,
)
from kubetrack.constants.timeouts import CLUSTER_CHECK_TIMEOUT, KUBECTL_COMMAND_TIMEOUT
from kubetrack.controllers.base import ClusterClient
from kubetrack.models.core.app_info import KubernetesApplication
from kubetrack.models.state.app_settings import MonitorSettings

logger = logging.getLogger(__name__)

_KUBECONFIG_ENTRY = "kubetrack"


class KubectlCommandError(RuntimeError):
    """Raised when kubectl exits with a non-zero status."""


class KubectlTimeoutError(KubectlCommandError, TimeoutError):
    """Raised when a kubectl process does not finish in time."""


def build_label_selector(labels: dict[str, str | None]) -> str:
    """Build a ``-l`` selector; a ``None`` value means "label exists"."""
    parts = []
    for key, value in labels.items():
        parts.append(key if value is None else f"{key}={value}")
    return ",".join(parts)


class KubectlClient(ClusterClient):
    """Cluster client shelling out to kubectl.

    Connection options mirror the ones of a kubeconfig entry: context,
    API server URL, bearer token (inline or from a file), CA certificate and
    client certificate/key. A bearer token is handed to kubectl through a
    private kubeconfig; call ``close()`` to remove it.
    """

    def __init__(
        self,
        settings: MonitorSettings,
        command_timeout: int = KUBECTL_COMMAND_TIMEOUT,
    ) -> None:
        self.settings = settings
        self.command_timeout = command_timeout
        self._kubeconfig_path: str | None = None
        self._kubeconfig_lock = threading.Lock()

    def _token_kubeconfig(self) -> str | None:
        """Private kubeconfig carrying the bearer token, written on first use.

        Keeps the token off the kubectl command line.
        """
        settings = self.settings
        if not (settings.oauth_token_file or settings.oauth_token_value):
            return None
        with self._kubeconfig_lock:
            if self._kubeconfig_path is not None:
                return self._kubeconfig_path

            cluster: dict[str, str] = {"server": settings.master_url or ""}
            if settings.ca_cert_file:
                cluster["certificate-authority"] = os.path.abspath(settings.ca_cert_file)
            user: dict[str, str] = {}
            if settings.oauth_token_file:
                user["tokenFile"] = os.path.abspath(settings.oauth_token_file)
            else:
                user["token"] = settings.oauth_token_value or ""
            if settings.client_key_file:
                user["client-key"] = os.path.abspath(settings.client_key_file)
            if settings.client_cert_file:
                user["client-certificate"] = os.path.abspath(settings.client_cert_file)
            config = {
                "apiVersion": "v1",
                "kind": "Config",
                "clusters": [{"name": _KUBECONFIG_ENTRY, "cluster": cluster}],
                "users": [{"name": _KUBECONFIG_ENTRY, "user": user}],
                "contexts": [
                    {
                        "name": _KUBECONFIG_ENTRY,
                        "context": {"cluster": _KUBECONFIG_ENTRY, "user": _KUBECONFIG_ENTRY},
                    }
                ],
                "current-context": _KUBECONFIG_ENTRY,
            }

            # mkstemp creates the file readable by its owner only
            fd, path = tempfile.mkstemp(prefix="kubetrack-", suffix=".kubeconfig")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                yaml.safe_dump(config, f, default_flow_style=False)
            logger.debug("Wrote kubeconfig for %s to %s", settings.master_url, path)
            self._kubeconfig_path = path
            return path

    def close(self) -> None:
        """Remove the private kubeconfig, if one was written."""
        with self._kubeconfig_lock:
            path, self._kubeconfig_path = self._kubeconfig_path, None
        if path is not None:
            Path(path).unlink(missing_ok=True)

    def _connection_args(self) -> list[str]:
        settings = self.settings
        kubeconfig = self._token_kubeconfig()
        if kubeconfig is not None:
            return ["--kubeconfig", kubeconfig, f"--request-timeout={settings.request_timeout}"]

        args: list[str] = []
        if settings.kube_context:
            args.extend(["--context", settings.kube_context])
        if settings.master_url:
            args.extend(["--server", settings.master_url])
        if settings.ca_cert_file:
            args.extend(["--certificate-authority", settings.ca_cert_file])
        if settings.client_key_file:
            args.extend(["--client-key", settings.client_key_file])
        if settings.client_cert_file:
            args.extend(["--client-certificate", settings.client_cert_file])
        args.append(f"--request-timeout={settings.request_timeout}")
        return args

    def build_command(self, args: tuple[str, ...]) -> list[str]:
        return ["kubectl", *self._connection_args(), *args]

    def _run_kubectl_sync(self, args: tuple[str, ...], timeout: float | None = None) -> str:
        """Run a kubectl command synchronously (thread-safe wrapper target)."""
        cmd = self.build_command(args)
        effective_timeout = timeout if timeout is not None else self.command_timeout
        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, timeout=effective_timeout
            )
        except subprocess.TimeoutExpired as exc:
            raise KubectlTimeoutError(
                f"kubectl {' '.join(args[:2])} timed out after {effective_timeout}s"
            ) from exc
        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise KubectlCommandError(stderr or "kubectl command failed")
        return result.stdout

    async def _run_kubectl(self, args: tuple[str, ...], timeout: float | None = None) -> str:
        return await asyncio.to_thread(self._run_kubectl_sync, args, timeout)

    async def _get_pods(self, selector: str) -> list[dict[str, Any]]:
        output = await self._run_kubectl(
            ("get", "pods", "--all-namespaces", "-l", selector, "-o", "json")
        )
        if not output.strip():
            return []
        try:
            data = json.loads(output)
        except json.JSONDecodeError as exc:
            raise KubectlCommandError(f"Unparseable pod list: {exc}") from exc
        return data.get("items", [])

    async def check_connection(self) -> bool:
        try:
            await self._run_kubectl(("version", "-o", "json"), timeout=CLUSTER_CHECK_TIMEOUT)
        except (KubectlCommandError, OSError) as exc:
            logger.warning("Cluster connection check failed: %s", exc)
            return False
        return True

    async def list_applications(self) -> list[KubernetesApplication]:
        selector = build_label_selector(
            {
                SPARK_ROLE_LABEL: SPARK_ROLE_DRIVER,
                SPARK_APP_TAG_LABEL: None,
                SPARK_APP_ID_LABEL: None,
            }
        )
        return [KubernetesApplication(pod) for pod in await self._get_pods(selector)]

    async def list_pods(self, labels: dict[str, str]) -> list[dict[str, Any]]:
        return await self._get_pods(build_label_selector(dict(labels)))

    async def tail_log(self, pod: dict[str, Any], max_lines: int) -> list[str]:
        metadata = pod.get("metadata") or {}
        output = await self._run_kubectl(
            (
                "logs",
                metadata.get("name", ""),
                "-n",
                metadata.get("namespace", "default"),
                f"--tail={max_lines}",
            )
        )
        return output.splitlines()

    async def delete_by_tag(self, app_tag: str) -> bool:
        selector = build_label_selector(
            {SPARK_ROLE_LABEL: SPARK_ROLE_DRIVER, SPARK_APP_TAG_LABEL: app_tag}
        )
        output = await self._run_kubectl(
            ("delete", "pods", "--all-namespaces", "-l", selector, "--wait=false")
        )
        return "deleted" in output

    async def delete_pod(self, app: KubernetesApplication) -> bool:
        output = await self._run_kubectl(
            ("delete", "pod", app.name, "-n", app.namespace or "default", "--wait=false")
        )
        return "deleted" in output
