"""Settings models and persistence."""

from kubetrack.models.state.app_settings import (
    ConfigError,
    ConfigLoadError,
    ConfigSaveError,
    MonitorSettings,
    parse_duration,
)
from kubetrack.models.state.config_manager import ConfigManager

__all__ = [
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigSaveError",
    "MonitorSettings",
    "parse_duration",
]
