"""Tests for the configuration system."""

import json

from qrmeasure.config.manager import ConfigManager
from qrmeasure.config.defaults import DEFAULT_CONFIG


class TestConfigManager:
    def test_load_defaults(self, config_manager):
        """Config loads with default values."""
        assert config_manager.get("calibration", "default_scale_factor") == 1.0
        assert config_manager.get("calibration", "uncalibrated_unit_label") == "px"
        assert config_manager.get("calibration", "label_decimals") == 2
        assert config_manager.get("logging", "log_to_file") is True

    def test_missing_key_default(self, config_manager):
        assert config_manager.get("calibration", "nope", 7) == 7
        assert config_manager.get("nope", "nope") is None

    def test_set_and_get(self, config_manager):
        """Can set and retrieve values."""
        config_manager.set("calibration", "uncalibrated_unit_label", "pixels")
        assert config_manager.get("calibration", "uncalibrated_unit_label") == "pixels"

    def test_set_new_group(self, config_manager):
        config_manager.set("extra", "key", 1)
        assert config_manager.get("extra", "key") == 1

    def test_save_and_reload(self, tmp_config_dir):
        """Config persists across save/load cycles."""
        mgr = ConfigManager(config_dir=tmp_config_dir)
        mgr.load()
        mgr.set("calibration", "label_decimals", 3)
        mgr.save()

        mgr2 = ConfigManager(config_dir=tmp_config_dir)
        mgr2.load()
        assert mgr2.get("calibration", "label_decimals") == 3
        assert mgr2.get("boxes", "default_width") == 100.0

    def test_partial_file_keeps_defaults(self, tmp_config_dir):
        (tmp_config_dir / ConfigManager.CONFIG_FILENAME).write_text(
            json.dumps({"boxes": {"default_width": 50.0}}), encoding="utf-8"
        )
        mgr = ConfigManager(config_dir=tmp_config_dir)
        mgr.load()
        assert mgr.get("boxes", "default_width") == 50.0
        assert mgr.get("boxes", "default_height") == 100.0

    def test_saved_file_is_plain_json(self, config_manager):
        config_manager.save()
        with open(config_manager.config_path, encoding="utf-8") as f:
            saved = json.load(f)
        assert saved == DEFAULT_CONFIG

    def test_corrupt_file_falls_back_to_defaults(self, tmp_config_dir):
        (tmp_config_dir / ConfigManager.CONFIG_FILENAME).write_text("{not json", encoding="utf-8")
        mgr = ConfigManager(config_dir=tmp_config_dir)
        mgr.load()
        assert mgr.get("calibration", "default_scale_factor") == 1.0

    def test_non_object_group_ignored(self, tmp_config_dir):
        (tmp_config_dir / ConfigManager.CONFIG_FILENAME).write_text(
            json.dumps({"calibration": 5, "boxes": {"default_width": 50.0}}), encoding="utf-8"
        )
        mgr = ConfigManager(config_dir=tmp_config_dir)
        mgr.load()
        assert mgr.get("calibration", "label_decimals") == 2
        assert mgr.get("boxes", "default_width") == 50.0

    def test_non_object_file_ignored(self, tmp_config_dir):
        (tmp_config_dir / ConfigManager.CONFIG_FILENAME).write_text("[1, 2]", encoding="utf-8")
        mgr = ConfigManager(config_dir=tmp_config_dir)
        mgr.load()
        assert mgr.get("calibration", "uncalibrated_unit_label") == "px"
