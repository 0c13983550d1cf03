"""Tests for monitor settings and YAML loading."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from kubetrack.models.state.app_settings import MonitorSettings, parse_duration
from kubetrack.models.state.config_manager import ConfigLoadError, ConfigManager


class TestParseDuration:
    """Tests for parse_duration."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (5, 5.0),
            (2.5, 2.5),
            ("5", 5.0),
            ("500ms", 0.5),
            ("5s", 5.0),
            ("10m", 600.0),
            ("10min", 600.0),
            ("1h", 3600.0),
            ("1d", 86400.0),
            (" 3S ", 3.0),
        ],
    )
    def test_valid(self, value: object, expected: float) -> None:
        assert parse_duration(value) == expected

    @pytest.mark.parametrize("value", ["soon", "5 parsecs", True, None, [1]])
    def test_invalid(self, value: object) -> None:
        with pytest.raises(ValueError):
            parse_duration(value)


class TestMonitorSettings:
    """Tests for MonitorSettings."""

    def test_defaults(self) -> None:
        settings = MonitorSettings()
        assert settings.cache_log_size == 200
        assert settings.app_lookup_timeout == 600.0
        assert settings.poll_interval == 5.0
        assert settings.leak_check_interval == 60.0
        assert settings.leak_check_timeout == 600.0
        assert settings.history_server_url is None
        assert settings.request_timeout == "30s"

    def test_dashed_aliases_and_durations(self) -> None:
        settings = MonitorSettings.model_validate(
            {"poll-interval": "500ms", "app-lookup-timeout": "2m", "cache-log-size": 50}
        )
        assert settings.poll_interval == 0.5
        assert settings.app_lookup_timeout == 120.0
        assert settings.cache_log_size == 50

    def test_field_names_accepted(self) -> None:
        assert MonitorSettings(poll_interval=2).poll_interval == 2.0

    @pytest.mark.parametrize("field", ["poll_interval", "leak_check_interval", "kill_timeout"])
    def test_non_positive_duration_rejected(self, field: str) -> None:
        with pytest.raises(ValidationError):
            MonitorSettings(**{field: 0})

    def test_non_positive_log_size_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MonitorSettings(cache_log_size=0)

    def test_token_sources_are_exclusive(self) -> None:
        with pytest.raises(ValidationError, match="OAuth token"):
            MonitorSettings(oauth_token_file="/tmp/token", oauth_token_value="abc")

    def test_token_requires_master_url(self) -> None:
        with pytest.raises(ValidationError, match="master-url"):
            MonitorSettings(oauth_token_value="abc")

    def test_token_rejects_kube_context(self) -> None:
        with pytest.raises(ValidationError, match="kube-context"):
            MonitorSettings(
                master_url="https://k8s.example:6443",
                kube_context="prod",
                oauth_token_file="/tmp/token",
            )

    def test_history_url_normalized(self) -> None:
        assert (
            MonitorSettings(history_server_url="http://h:18080/").history_server_url
            == "http://h:18080"
        )
        assert MonitorSettings(history_server_url="").history_server_url is None


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        settings = ConfigManager.load(tmp_path / "missing.yaml")
        assert settings == MonitorSettings()

    def test_load_section(self, tmp_path: Path) -> None:
        path = tmp_path / "kubetrack.yaml"
        path.write_text(
            yaml.safe_dump(
                {
                    "kubetrack": {
                        "poll-interval": "1s",
                        "leak-check-timeout": "15m",
                        "history-server-url": "http://history:18080",
                    },
                    "other": {"ignored": True},
                }
            ),
            encoding="utf-8",
        )

        settings = ConfigManager.load(path)

        assert settings.poll_interval == 1.0
        assert settings.leak_check_timeout == 900.0
        assert settings.history_server_url == "http://history:18080"

    def test_load_flat_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "flat.yaml"
        path.write_text("cache_log_size: 10\n", encoding="utf-8")
        assert ConfigManager.load(path).cache_log_size == 10

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("kubetrack: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigLoadError):
            ConfigManager.load(path)

    def test_invalid_values(self, tmp_path: Path) -> None:
        path = tmp_path / "bad-values.yaml"
        path.write_text("kubetrack:\n  poll-interval: never\n", encoding="utf-8")
        with pytest.raises(ConfigLoadError, match="Invalid settings"):
            ConfigManager.load(path)

    def test_non_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigLoadError):
            ConfigManager.load(path)

    def test_save_and_load(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "settings.yaml"
        original = MonitorSettings(poll_interval=3, kube_context="staging")

        ConfigManager.save(original, path)

        assert ConfigManager.load(path) == original
