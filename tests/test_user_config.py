"""
Unit tests for layered user configuration.
"""

import json

import pytest

from imgcompare.user_config import SETTINGS, UserConfig, get_user_config, to_ladder


@pytest.fixture
def user_config(temp_dir, monkeypatch):
    """UserConfig pointed at an empty temporary config directory."""
    for env_var, _, _ in SETTINGS.values():
        monkeypatch.delenv(env_var, raising=False)
    return UserConfig(config_dir=temp_dir / "config")


def _write_config(config, data):
    config.config_dir.mkdir(parents=True, exist_ok=True)
    config.config_file_path.write_text(json.dumps(data), encoding='utf-8')
    config.reload()


class TestToLadder:
    """Test to_ladder conversion."""

    def test_list(self):
        assert to_ladder([16, 128]) == (16, 128)

    def test_single_number(self):
        assert to_ladder(16) == (16,)

    def test_comma_separated(self):
        assert to_ladder("16, 256") == (16, 256)

    def test_json_style_string(self):
        assert to_ladder("[16,256]") == (16, 256)

    def test_garbage(self):
        with pytest.raises(ValueError):
            to_ladder("16,abc")


class TestUserConfig:
    """Test UserConfig priority layering."""

    def test_shared_instance(self):
        assert get_user_config() is get_user_config()

    def test_config_dir_from_env(self, temp_dir, monkeypatch):
        monkeypatch.setenv('IMGCOMPARE_CONFIG_DIR', str(temp_dir / "elsewhere"))
        assert UserConfig().config_file_path == temp_dir / "elsewhere" / "config.json"

    def test_defaults(self, user_config):
        assert user_config.default_tolerance == 2
        assert user_config.default_threshold == 0.75
        assert user_config.resolution_ladder == (16, 128, 512, 1024)
        assert user_config.max_candidate_bytes == 300_000_000
        assert user_config.default_workers == 4
        assert user_config.source_of('default_workers') == 'default'

    def test_config_file_overrides_defaults(self, user_config):
        _write_config(user_config, {"default_tolerance": 5, "resolution_ladder": [8, 64]})
        assert user_config.default_tolerance == 5
        assert user_config.resolution_ladder == (8, 64)
        assert user_config.source_of('default_tolerance') == 'file'

    def test_env_overrides_config_file(self, user_config, monkeypatch):
        _write_config(user_config, {"default_threshold": 0.9})
        monkeypatch.setenv('IMGCOMPARE_THRESHOLD', '0.6')
        assert user_config.default_threshold == 0.6
        assert user_config.source_of('default_threshold') == 'env'

    def test_ladder_from_comma_separated_env(self, user_config, monkeypatch):
        monkeypatch.setenv('IMGCOMPARE_LADDER', '16,256')
        assert user_config.resolution_ladder == (16, 256)

    def test_single_level_ladder_from_env(self, user_config, monkeypatch):
        monkeypatch.setenv('IMGCOMPARE_LADDER', '16')
        assert user_config.resolution_ladder == (16,)

    def test_single_level_ladder_from_file(self, user_config):
        _write_config(user_config, {"resolution_ladder": 16})
        assert user_config.resolution_ladder == (16,)

    def test_unconvertible_env_value_falls_back(self, user_config, monkeypatch, caplog):
        monkeypatch.setenv('IMGCOMPARE_WORKERS', 'lots')
        with caplog.at_level("WARNING"):
            assert user_config.default_workers == 4
        assert "IMGCOMPARE_WORKERS" in caplog.text

    def test_invalid_config_file_falls_back(self, user_config):
        user_config.config_dir.mkdir(parents=True, exist_ok=True)
        user_config.config_file_path.write_text("{not json", encoding='utf-8')
        user_config.reload()
        assert user_config.default_workers == 4

    def test_non_object_config_file_ignored(self, user_config):
        _write_config(user_config, [1, 2, 3])
        assert user_config.default_tolerance == 2

    def test_as_dict(self, user_config):
        assert set(user_config.as_dict()) == set(SETTINGS)

    def test_create_example_config(self, user_config):
        assert user_config.create_example_config()
        data = json.loads(user_config.config_file_path.read_text(encoding='utf-8'))
        assert data['resolution_ladder'] == [16, 128, 512, 1024]
        assert data['max_candidate_bytes'] == 300_000_000
        assert user_config.source_of('default_tolerance') == 'file'
