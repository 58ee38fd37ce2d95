"""Tests for JSON settings and the anon key override."""

import json

import pytest

from infrastructure.settings import ANON_KEY_ENV, JsonSettings


@pytest.fixture
def settings_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps(
            {
                "store": {"url": "https://x", "anon_key": "from-file"},
                "search": {"debounce_ms": "250"},
                "gallery": {"card_size": "big"},
            }
        ),
        encoding="utf-8",
    )
    return path


class TestJsonSettings:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            JsonSettings(tmp_path / "absent.json")

    def test_dotted_get(self, settings_file):
        settings = JsonSettings(settings_file)
        assert settings.get("store.url") == "https://x"
        assert settings.get("store.missing", "d") == "d"
        assert settings.get("store.url.deeper") is None

    def test_get_int(self, settings_file):
        settings = JsonSettings(settings_file)
        assert settings.get_int("search.debounce_ms", 300) == 250
        assert settings.get_int("gallery.card_size", 240) == 240
        assert settings.get_int("gallery.recent_days", 7) == 7

    def test_anon_key_from_file(self, settings_file, monkeypatch):
        monkeypatch.delenv(ANON_KEY_ENV, raising=False)
        assert JsonSettings(settings_file).store_anon_key() == "from-file"

    def test_anon_key_env_override(self, settings_file, monkeypatch):
        monkeypatch.setenv(ANON_KEY_ENV, "from-env")
        assert JsonSettings(settings_file).store_anon_key() == "from-env"


class TestCheckoutSettings:
    """The app runs from a checkout and reads the settings file beside main.py."""

    def test_bundled_settings_load(self):
        import main

        settings = JsonSettings(main.BASE_DIR / "settings.json")
        assert settings.get("store.table") == "cats"
        assert settings.get_int("search.debounce_ms", 0) == 300
        assert settings.get_int("gallery.recent_days", 0) == 7
        assert settings.get_int("gallery.recent_limit", 0) == 8
