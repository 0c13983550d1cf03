"""Monitor settings models."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from kubetrack.constants.defaults import (
    APP_LOOKUP_TIMEOUT_DEFAULT,
    CACHE_LOG_SIZE_DEFAULT,
    LEAK_CHECK_INTERVAL_DEFAULT,
    LEAK_CHECK_TIMEOUT_DEFAULT,
    POLL_INTERVAL_DEFAULT,
)
from kubetrack.constants.timeouts import CLUSTER_REQUEST_TIMEOUT, KILL_REQUEST_TIMEOUT

_DURATION_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ms|s|m|min|h|d)?\s*$", re.IGNORECASE)
_DURATION_UNITS = {
    None: 1.0,
    "ms": 0.001,
    "s": 1.0,
    "m": 60.0,
    "min": 60.0,
    "h": 3600.0,
    "d": 86400.0,
}


def parse_duration(value: object) -> float:
    """Parse a duration given as seconds or as a string like ``500ms``/``5s``/``10m``."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        match = _DURATION_PATTERN.match(value)
        if match:
            unit = match.group(2).lower() if match.group(2) else None
            return float(match.group(1)) * _DURATION_UNITS[unit]
    raise ValueError(f"Invalid duration: {value!r}")


def _dashed(name: str) -> str:
    return name.replace("_", "-")


class MonitorSettings(BaseModel):
    """Settings shared by every monitor, the resolver and the leak sweeper."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=_dashed)

    # Polling
    cache_log_size: int = CACHE_LOG_SIZE_DEFAULT
    app_lookup_timeout: float = APP_LOOKUP_TIMEOUT_DEFAULT  # seconds
    poll_interval: float = POLL_INTERVAL_DEFAULT  # seconds
    kill_timeout: float = KILL_REQUEST_TIMEOUT  # seconds

    # Leaked application GC
    leak_check_interval: float = LEAK_CHECK_INTERVAL_DEFAULT  # seconds
    leak_check_timeout: float = LEAK_CHECK_TIMEOUT_DEFAULT  # seconds

    # History server base URL used once the application is terminal
    history_server_url: str | None = None

    # Cluster connection
    kube_context: str | None = None
    master_url: str | None = None
    oauth_token_file: str | None = None
    oauth_token_value: str | None = None
    ca_cert_file: str | None = None
    client_key_file: str | None = None
    client_cert_file: str | None = None
    request_timeout: str = CLUSTER_REQUEST_TIMEOUT

    @field_validator(
        "app_lookup_timeout",
        "poll_interval",
        "kill_timeout",
        "leak_check_interval",
        "leak_check_timeout",
        mode="before",
    )
    @classmethod
    def _parse_duration(cls, value: object) -> float:
        seconds = parse_duration(value)
        if seconds <= 0:
            raise ValueError("duration must be positive")
        return seconds

    @field_validator("cache_log_size")
    @classmethod
    def _check_log_size(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("cache_log_size must be positive")
        return value

    @field_validator("history_server_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str | None) -> str | None:
        if not value:
            return None
        return value.rstrip("/")

    @model_validator(mode="after")
    def _check_token_sources(self) -> MonitorSettings:
        if self.oauth_token_file and self.oauth_token_value:
            raise ValueError(
                "Cannot specify OAuth token through both a file "
                f"{self.oauth_token_file} and a value."
            )
        if self.oauth_token_file or self.oauth_token_value:
            if not self.master_url:
                raise ValueError("An OAuth token requires master-url to be set.")
            if self.kube_context:
                raise ValueError("An OAuth token cannot be combined with kube-context.")
        return self


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""


class ConfigSaveError(ConfigError):
    """Raised when settings fail to save."""
