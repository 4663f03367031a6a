"""Tests für das Konfigurationssystem."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from config.defaults import default_app_config
from config.manager import ConfigManager
from config.schema import AppConfig, DeadlineConfig, DisplayConfig, StorageConfig


# ─── DEFAULT-KONFIGURATION ────────────────────────────────────────────────────

class TestDefaultConfig:
    def test_defaults(self):
        """Standardwerte: ein Tag Kulanz, Berliner Zeit, Daten unter data/store."""
        cfg = default_app_config()
        assert cfg.deadlines.grace_days == 1
        assert cfg.display.timezone == "Europe/Berlin"
        assert cfg.storage.data_dir == "data/store"
        assert cfg.storage.lectures_file == "lectures.json"
        assert cfg.log_level == "WARNING"

    def test_empty_config_uses_defaults(self):
        assert AppConfig.model_validate({}) == default_app_config()


# ─── VALIDIERUNG ──────────────────────────────────────────────────────────────

class TestValidation:
    def test_unknown_timezone_rejected(self):
        with pytest.raises(ValidationError):
            DisplayConfig(timezone="Mars/Olympus_Mons")

    @pytest.mark.parametrize("days", [-1, 31])
    def test_grace_days_bounds(self, days):
        with pytest.raises(ValidationError):
            DeadlineConfig(grace_days=days)

    def test_grace_days_zero_allowed(self):
        assert DeadlineConfig(grace_days=0).grace_days == 0

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            AppConfig(log_level="LAUT")


# ─── CONFIG-MANAGER ───────────────────────────────────────────────────────────

class TestConfigManager:
    def test_save_and_load_roundtrip(self, tmp_path: Path):
        """Config speichern und wieder laden ergibt identische Daten."""
        cfg = AppConfig(
            storage=StorageConfig(data_dir=str(tmp_path / "daten")),
            deadlines=DeadlineConfig(grace_days=3),
            display=DisplayConfig(timezone="UTC"),
            log_level="INFO",
        )
        mgr = ConfigManager(tmp_path / "app_config.yaml")
        mgr.save(cfg)
        assert mgr.load() == cfg

    def test_saved_file_has_comments(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "app_config.yaml")
        path = mgr.save(default_app_config())
        text = path.read_text(encoding="utf-8")
        assert "─── Abgabetermine ───" in text
        assert "Speicherung immer in UTC" in text
        assert "grace_days: 1" in text

    def test_first_run_check_no_file(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "nonexistent.yaml")
        assert mgr.first_run_check() is True

    def test_first_run_check_with_file(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "app_config.yaml")
        mgr.save(default_app_config())
        assert mgr.first_run_check() is False

    def test_load_nonexistent_raises(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "app_config.yaml")
        with pytest.raises(FileNotFoundError):
            mgr.load(tmp_path / "not_there.yaml")

    def test_load_invalid_raises_value_error(self, tmp_path: Path):
        path = tmp_path / "app_config.yaml"
        path.write_text("deadlines:\n  grace_days: 99\n", encoding="utf-8")
        with pytest.raises(ValueError, match="ungültig"):
            ConfigManager(path).load()

    def test_load_or_default_without_file(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "fehlt.yaml")
        assert mgr.load_or_default() == default_app_config()

    def test_load_or_default_with_file(self, tmp_path: Path):
        path = tmp_path / "app_config.yaml"
        path.write_text("deadlines:\n  grace_days: 5\n", encoding="utf-8")
        assert ConfigManager(path).load_or_default().deadlines.grace_days == 5
