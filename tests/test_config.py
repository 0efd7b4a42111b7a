"""Tests for configuration loading."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from pinyin_search.config import (
    DEFAULT_SEPARATORS,
    Settings,
    get_settings,
    load_settings,
    reset_settings,
)


@pytest.fixture(autouse=True)
def _reset():
    """Reset global settings before each test."""
    reset_settings()
    yield
    reset_settings()


class TestSettings:
    """Test Settings model defaults."""

    def test_default_dictionary(self):
        settings = Settings()
        assert settings.dictionary.provider == "pypinyin"
        assert settings.dictionary.format == "without_tone"
        assert settings.dictionary.paths == []

    def test_default_tokenizer(self):
        settings = Settings()
        assert settings.tokenizer.separators == DEFAULT_SEPARATORS
        assert " " in settings.tokenizer.separators
        assert settings.tokenizer.include_hanzi is False

    def test_default_search(self):
        settings = Settings()
        assert settings.search.max_workers == 4
        assert settings.search.weights.base == 1000.0

    def test_cache_disabled_by_default(self):
        assert Settings().cache.enabled is False

    def test_invalid_workers_rejected(self):
        with pytest.raises(ValidationError):
            Settings(search={"max_workers": 0})

    def test_invalid_format_rejected(self):
        with pytest.raises(ValidationError):
            Settings(dictionary={"format": "pinyin"})


class TestLoadSettings:
    """Test loading settings from YAML file."""

    def test_load_from_yaml(self, tmp_path: Path):
        config = {
            "dictionary": {"provider": "json", "paths": ["a.json", "b.json"]},
            "tokenizer": {"include_hanzi": True},
            "cache": {"enabled": True, "max_size": 16},
        }
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.dump(config))

        settings = load_settings(config_file)
        assert settings.dictionary.provider == "json"
        assert settings.dictionary.paths == ["a.json", "b.json"]
        assert settings.tokenizer.include_hanzi is True
        assert settings.cache.max_size == 16

    def test_load_nonexistent_file_uses_defaults(self):
        settings = load_settings("/nonexistent/config.yaml")
        assert settings.dictionary.provider == "pypinyin"

    def test_empty_yaml_uses_defaults(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")
        assert load_settings(config_file).search.max_workers == 4

    def test_env_var_resolution_in_yaml(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("PINYIN_DICT_FILE", "/data/char_base.json")
        config = {"dictionary": {"provider": "json", "paths": ["${PINYIN_DICT_FILE}"]}}
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.dump(config))

        settings = load_settings(config_file)
        assert settings.dictionary.paths == ["/data/char_base.json"]

    def test_env_var_missing_resolves_to_empty(self, tmp_path: Path):
        config = {"tokenizer": {"separators": "${NONEXISTENT_VAR}"}}
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.dump(config))

        settings = load_settings(config_file)
        assert settings.tokenizer.separators == ""

    def test_local_overlay_is_deep_merged(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        (tmp_path / "config.yaml").write_text(
            yaml.dump({"cache": {"enabled": True, "max_size": 64}})
        )
        (tmp_path / "config.local.yaml").write_text(yaml.dump({"cache": {"max_size": 8}}))
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("PINYIN_SEARCH_CONFIG_PATH", raising=False)

        settings = load_settings()
        assert settings.cache.enabled is True
        assert settings.cache.max_size == 8

    def test_config_path_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        (tmp_path / "config.yaml").write_text(yaml.dump({"search": {"max_workers": 2}}))
        other = tmp_path / "other.yaml"
        other.write_text(yaml.dump({"search": {"max_workers": 6}}))
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("PINYIN_SEARCH_CONFIG_PATH", str(other))

        assert load_settings().search.max_workers == 6

    def test_environment_variables_override_yaml_values(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.dump({"search": {"max_workers": 2}}))
        monkeypatch.setenv("PINYIN_SEARCH_SEARCH__MAX_WORKERS", "8")

        settings = load_settings(config_file)
        assert settings.search.max_workers == 8


class TestGetSettings:
    def test_singleton(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("PINYIN_SEARCH_CONFIG_PATH", raising=False)
        assert get_settings() is get_settings()

    def test_reset(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("PINYIN_SEARCH_CONFIG_PATH", raising=False)
        first = get_settings()
        reset_settings()
        assert get_settings() is not first
