# tests/test_config.py
from pathlib import Path

import pytest

from plume_cli.config import get_settings
from plume_cli.errors import ConfigError


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("PLUME_DB_PATH", "PLUME_MIN_TEXT_LENGTH", "PLUME_MAX_TEXT_LENGTH",
                     "PLUME_MAX_FILE_SIZE", "PLUME_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        settings = get_settings()
        assert settings.db_path == Path("plume.db")
        assert settings.min_text_length == 10
        assert settings.max_text_length == 50_000
        assert settings.max_file_size == 10 * 1024 * 1024
        assert settings.log_level == "WARNING"

    def test_integer_from_environment(self, monkeypatch):
        monkeypatch.setenv("PLUME_MAX_TEXT_LENGTH", " 2000 ")
        assert get_settings().max_text_length == 2000

    def test_non_numeric_value(self, monkeypatch):
        monkeypatch.setenv("PLUME_MAX_TEXT_LENGTH", "abc")
        with pytest.raises(ConfigError, match="PLUME_MAX_TEXT_LENGTH"):
            get_settings()
