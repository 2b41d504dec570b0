"""
Unit tests for config_manager module.
"""

import json

from SM_Libs.config_manager import ConfigManager, StampMakerConfig
from SM_Libs.constants import DEFAULT_ROW_CHUNK, MAX_UPLOAD_BYTES


class TestStampMakerConfig:
    """Tests for StampMakerConfig."""

    def test_defaults(self):
        config = StampMakerConfig()
        assert config.max_upload_bytes == MAX_UPLOAD_BYTES == 10 * 1024 * 1024
        assert config.row_chunk == DEFAULT_ROW_CHUNK
        assert config.letter_line_min_spacing == 1
        assert config.embed_data_url is True
        assert config.strict_ordering is False

    def test_from_dict_ignores_unknown_keys(self):
        config = StampMakerConfig.from_dict({"json_indent": 4, "theme": "dark"})
        assert config.json_indent == 4
        assert not hasattr(config, "theme")

    def test_from_dict_keeps_defaults_for_bad_values(self):
        config = StampMakerConfig.from_dict({
            "row_chunk": "many",
            "embed_data_url": 1,
            "letter_line_min_spacing": -3,
            "output_dir": 5,
        })
        assert config == StampMakerConfig()

    def test_zero_row_chunk_reset(self):
        assert StampMakerConfig.from_dict({"row_chunk": 0}).row_chunk == DEFAULT_ROW_CHUNK


class TestConfigManager:
    """Tests for ConfigManager load/save."""

    def test_missing_file_gives_defaults(self, tmp_path):
        assert ConfigManager(tmp_path / "none.json").load() == StampMakerConfig()

    def test_save_and_load(self, tmp_path):
        manager = ConfigManager(tmp_path / "settings" / "config.json")
        config = StampMakerConfig(strict_ordering=True, output_dir="stamps", row_chunk=32)

        assert manager.save(config) is None
        assert manager.load() == config

    def test_invalid_json_gives_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{broken", encoding="utf-8")
        assert ConfigManager(path).load() == StampMakerConfig()

    def test_non_object_gives_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
        assert ConfigManager(path).load() == StampMakerConfig()

    def test_save_error_is_reported(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        error = ConfigManager(blocker / "config.json").save(StampMakerConfig())
        assert error is not None
