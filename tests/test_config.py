import sys
import os

import pytest
from pydantic import ValidationError

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from config import Settings, get_settings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("PAYMENTS_LOG_LEVEL", "PAYMENTS_LOG_FORMAT", "PAYMENTS_PREFETCH_RECORDS"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    def test_default_values(self):
        settings = Settings()

        assert settings.log_level == "WARNING"
        assert settings.log_format == "%(levelname)s: %(message)s"
        assert settings.prefetch_records == 1024

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("PAYMENTS_LOG_LEVEL", "debug")
        monkeypatch.setenv("PAYMENTS_PREFETCH_RECORDS", "0")

        settings = Settings()

        assert settings.log_level == "DEBUG"
        assert settings.prefetch_records == 0

    def test_from_env_file(self, tmp_path):
        (tmp_path / ".env").write_text("PAYMENTS_LOG_LEVEL=info\nUNRELATED=1\n")

        assert Settings().log_level == "INFO"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("PAYMENTS_LOG_LEVEL", "chatty")

        with pytest.raises(ValidationError):
            Settings()

    def test_negative_prefetch_rejected(self, monkeypatch):
        monkeypatch.setenv("PAYMENTS_PREFETCH_RECORDS", "-1")

        with pytest.raises(ValidationError):
            Settings()

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()
