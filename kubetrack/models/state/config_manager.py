"""YAML-backed settings persistence."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from kubetrack.models.state.app_settings import (
    ConfigLoadError,
    ConfigSaveError,
    MonitorSettings,
)

logger = logging.getLogger(__name__)


class ConfigManager:
    """Loads and saves MonitorSettings from a YAML file.

    Keys may use either ``snake_case`` or ``dashed-names``. A top-level
    ``kubetrack`` section is used when present so the settings can share a
    file with other components.
    """

    SECTION = "kubetrack"

    @classmethod
    def load(cls, path: str | Path) -> MonitorSettings:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            logger.info("No settings file at %s, using defaults", config_path)
            return MonitorSettings()

        try:
            with config_path.open(encoding="utf-8") as handle:
                raw = yaml.safe_load(handle) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigLoadError(f"Failed to read settings from {config_path}: {exc}") from exc

        if not isinstance(raw, dict):
            raise ConfigLoadError(f"Settings file {config_path} must contain a mapping")
        section = raw.get(cls.SECTION, raw)
        if not isinstance(section, dict):
            raise ConfigLoadError(f"Section '{cls.SECTION}' in {config_path} must be a mapping")

        try:
            return MonitorSettings.model_validate(section)
        except ValidationError as exc:
            raise ConfigLoadError(f"Invalid settings in {config_path}: {exc}") from exc

    @classmethod
    def save(cls, settings: MonitorSettings, path: str | Path) -> None:
        config_path = Path(path).expanduser()
        payload = {cls.SECTION: settings.model_dump(exclude_none=True)}
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with config_path.open("w", encoding="utf-8") as handle:
                yaml.safe_dump(payload, handle, default_flow_style=False, sort_keys=False)
        except OSError as exc:
            raise ConfigSaveError(f"Failed to write settings to {config_path}: {exc}") from exc
