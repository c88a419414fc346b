"""Tests for parser settings and the data manager"""

import json

import pytest

from unipen.config import (
    SETTINGS_FILE,
    DataManager,
    ParserSettings,
    get_data_manager,
    load_settings,
)


@pytest.fixture
def user_dir(tmp_path, monkeypatch):
    """Point the user data directory at an empty temporary directory"""
    directory = tmp_path / "user-data"
    monkeypatch.setenv("UNIPEN_DATA_DIR", str(directory))
    return directory


class TestParserSettings:
    def test_defaults(self):
        settings = ParserSettings()
        assert settings.max_include_depth == 64
        assert settings.encoding == "utf-8"
        assert settings.strict_ranges is False
        assert settings.strict_component_refs is False

    def test_from_dict(self):
        settings = ParserSettings.from_dict({"strict_ranges": True, "max_include_depth": 3})
        assert settings == ParserSettings(max_include_depth=3, strict_ranges=True)

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown parser settings: verbose"):
            ParserSettings.from_dict({"verbose": True})

    @pytest.mark.parametrize(
        "data",
        [
            {"max_include_depth": "deep"},
            {"max_include_depth": True},
            {"strict_ranges": "yes"},
            {"encoding": 8},
            {"max_include_depth": -1},
        ],
    )
    def test_invalid_values(self, data):
        with pytest.raises(ValueError):
            ParserSettings.from_dict(data)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            ParserSettings().strict_ranges = True


class TestLoadSettings:
    def test_packaged_defaults(self, user_dir):
        """Without a user override the packaged file gives the defaults"""
        assert load_settings() == ParserSettings()

    def test_user_override(self, user_dir):
        user_dir.mkdir()
        (user_dir / SETTINGS_FILE).write_text("strict_ranges: true\n", encoding="utf-8")
        assert load_settings().strict_ranges is True

    def test_explicit_yaml_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("max_include_depth: 2\nstrict_component_refs: true\n", encoding="utf-8")
        assert load_settings(str(path)) == ParserSettings(max_include_depth=2, strict_component_refs=True)

    def test_explicit_json_file(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"encoding": "latin-1"}), encoding="utf-8")
        assert load_settings(str(path)).encoding == "latin-1"

    def test_explicit_file_must_be_mapping(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_settings(str(path))

    def test_broken_user_override_falls_back(self, user_dir):
        user_dir.mkdir()
        (user_dir / SETTINGS_FILE).write_text("strict_ranges: [unclosed\n", encoding="utf-8")
        assert load_settings() == ParserSettings()


class TestDataManager:
    """User overrides of packaged data files"""

    def test_user_dir_from_environment(self, user_dir):
        assert get_data_manager().user_data_dir == user_dir

    def test_package_file_present(self, user_dir):
        dm = DataManager()
        info = dm.get_data_info()
        assert SETTINGS_FILE in info["package_files"]
        assert info["user_files"] == []
        assert not user_dir.exists()

    def test_copy_and_reset(self, user_dir):
        dm = DataManager()
        assert dm.copy_package_to_user(SETTINGS_FILE) is True
        assert (user_dir / SETTINGS_FILE).exists()
        assert dm.copy_package_to_user(SETTINGS_FILE) is False
        assert dm.get_data_info()["user_files"] == [SETTINGS_FILE]

        assert dm.reset_to_defaults(SETTINGS_FILE) == 1
        assert dm.reset_to_defaults(SETTINGS_FILE) == 0

    def test_copy_unknown_file(self, user_dir):
        assert DataManager().copy_package_to_user("nothing.yaml") is False

    def test_user_file_overrides_package_file(self, user_dir):
        """A user copy of a data file shadows the packaged one"""
        user_dir.mkdir()
        (user_dir / SETTINGS_FILE).write_text("max_include_depth: 3\n", encoding="utf-8")
        dm = DataManager()
        assert dm.load_data_file(SETTINGS_FILE) == {"max_include_depth": 3}
        assert dm.load_data_file("missing.yaml") == {}

        assert dm.reset_to_defaults() == 1
        assert dm.load_data_file(SETTINGS_FILE)["max_include_depth"] == 64
