"""
Unit tests for the configuration store.

Run with:
    pytest tests/test_config.py -v
"""

import json
import stat

import pytest

from aigit.config.settings import (
    Settings,
    default_config_path,
    load_settings,
    mask_api_key,
)
from aigit.exceptions import ConfigInvalidError, ConfigMissingError


class TestDefaults:

    def test_field_defaults(self):
        settings = Settings()
        assert settings.provider == "openai"
        assert settings.language == "en"
        assert settings.api_key == ""
        assert settings.model == ""
        assert settings.base_url is None

    def test_default_path_is_under_home(self, isolated_env):
        assert default_config_path() == isolated_env / ".aigit" / "config.json"


class TestLoad:

    def test_missing_file(self, config_path):
        with pytest.raises(ConfigMissingError, match="aigit config"):
            load_settings(config_path)

    def test_empty_api_key(self, write_config):
        path = write_config(provider="openai", api_key="", model="gpt-4o", language="en")
        with pytest.raises(ConfigMissingError, match="api_key is required"):
            load_settings(path)

    def test_loads_all_fields(self, write_config):
        path = write_config(
            provider="google", api_key="g-key-123456", model="gemini-pro",
            language="zh", base_url="https://proxy.example.com/v1beta",
        )
        settings = load_settings(path)
        assert settings.provider == "google"
        assert settings.api_key == "g-key-123456"
        assert settings.model == "gemini-pro"
        assert settings.language == "zh"
        assert settings.base_url == "https://proxy.example.com/v1beta"

    def test_missing_fields_take_defaults(self, write_config):
        settings = load_settings(write_config(api_key="sk-abc"))
        assert settings.provider == "openai"
        assert settings.language == "en"

    def test_unknown_keys_ignored(self, write_config):
        settings = load_settings(write_config(api_key="sk-abc", theme="dark"))
        assert not hasattr(settings, "theme")

    def test_invalid_provider(self, write_config):
        with pytest.raises(ConfigInvalidError, match="provider"):
            load_settings(write_config(api_key="sk-abc", provider="mistral"))

    def test_invalid_language(self, write_config):
        with pytest.raises(ConfigInvalidError, match="language"):
            load_settings(write_config(api_key="sk-abc", language="fr"))

    def test_malformed_json(self, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text("{not json")
        with pytest.raises(ConfigInvalidError):
            load_settings(config_path)

    def test_empty_base_url_means_unset(self, write_config):
        settings = load_settings(write_config(api_key="sk-abc", base_url=""))
        assert settings.base_url is None

    def test_env_fills_missing_key(self, write_config, monkeypatch):
        monkeypatch.setenv("AIGIT_API_KEY", "sk-from-env")
        settings = load_settings(write_config(provider="claude"))
        assert settings.api_key == "sk-from-env"
        assert settings.provider == "claude"

    def test_reads_fresh_each_time(self, write_config):
        path = write_config(api_key="sk-abc", language="en")
        assert load_settings(path).language == "en"
        write_config(api_key="sk-abc", language="zh")
        assert load_settings(path).language == "zh"


class TestSave:

    def test_round_trip(self, config_path):
        saved = Settings(
            provider="openrouter", api_key="or-secret-key", model="anthropic/claude-3.5-sonnet",
            language="zh", base_url="https://openrouter.ai/api/v1",
        )
        saved.save_to_file(config_path)
        loaded = load_settings(config_path)

        assert loaded.provider == saved.provider
        assert loaded.model == saved.model
        assert loaded.language == saved.language
        assert loaded.base_url == saved.base_url

    def test_file_format(self, config_path):
        Settings(provider="claude", api_key="ant-key", language="en").save_to_file(config_path)
        text = config_path.read_text()

        assert text.startswith('{\n  "provider": "claude"')
        data = json.loads(text)
        assert set(data) == {"provider", "api_key", "model", "language"}

    def test_permissions(self, config_path):
        Settings(api_key="sk-abc").save_to_file(config_path)
        assert stat.S_IMODE(config_path.stat().st_mode) == 0o600

    def test_permissions_tightened_on_existing_file(self, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text("{}")
        config_path.chmod(0o644)

        Settings(api_key="sk-abc").save_to_file(config_path)
        assert stat.S_IMODE(config_path.stat().st_mode) == 0o600


    def test_env_values_are_not_written(self, write_config, monkeypatch):
        monkeypatch.setenv("AIGIT_API_KEY", "sk-env-secret-123456")
        path = write_config(provider="openai")

        settings = Settings.from_file(path)
        assert settings.api_key == "sk-env-secret-123456"
        settings.set_value("language", "zh")
        settings.save_to_file(path)

        data = json.loads(path.read_text())
        assert "api_key" not in data
        assert data["language"] == "zh"

    def test_file_values_win_and_are_kept(self, write_config, monkeypatch):
        monkeypatch.setenv("AIGIT_API_KEY", "sk-env-secret-123456")
        path = write_config(api_key="sk-file-key")

        settings = Settings.from_file(path)
        settings.save_to_file(path)

        assert json.loads(path.read_text())["api_key"] == "sk-file-key"

    def test_explicitly_set_env_field_is_written(self, write_config, monkeypatch):
        monkeypatch.setenv("aigit_model", "gpt-4o-mini")
        path = write_config(api_key="sk-abc")

        settings = Settings.from_file(path)
        assert settings.model == "gpt-4o-mini"
        settings.save_to_file(path)
        assert "model" not in json.loads(path.read_text())

        settings.set_value("model", "gpt-4o")
        settings.save_to_file(path)
        assert json.loads(path.read_text())["model"] == "gpt-4o"


class TestSetValue:

    @pytest.mark.parametrize("key, value", [
        ("provider", "google"),
        ("api_key", "sk-new"),
        ("model", "gpt-4o-mini"),
        ("language", "zh"),
        ("base_url", "http://localhost:11434/v1"),
    ])
    def test_valid_keys(self, key, value):
        settings = Settings()
        settings.set_value(key, value)
        assert getattr(settings, key) == value

    def test_invalid_provider(self):
        with pytest.raises(ConfigInvalidError, match="invalid provider: foo"):
            Settings().set_value("provider", "foo")

    def test_invalid_language(self):
        with pytest.raises(ConfigInvalidError, match="invalid language: de"):
            Settings().set_value("language", "de")

    def test_unknown_key(self):
        with pytest.raises(ConfigInvalidError, match="unknown config key: timeout"):
            Settings().set_value("timeout", "30")

    def test_clear_base_url(self):
        settings = Settings(base_url="http://x")
        settings.set_value("base_url", "")
        assert settings.base_url is None


class TestMasking:

    @pytest.mark.parametrize("key, expected", [
        ("", "****"),
        ("short", "****"),
        ("12345678", "****"),
        ("123456789", "1234****6789"),
        ("sk-proj-abcdefghijklmnop", "sk-p****mnop"),
    ])
    def test_mask(self, key, expected):
        assert mask_api_key(key) == expected

    def test_display_items_mask_key(self):
        settings = Settings(api_key="sk-1234567890abcd", model="gpt-4o")
        items = dict(settings.display_items())
        assert items["api_key"] == "sk-1****abcd"
        assert "base_url" not in items

    def test_display_items_include_base_url(self):
        items = dict(Settings(api_key="k", base_url="http://proxy").display_items())
        assert items["base_url"] == "http://proxy"
