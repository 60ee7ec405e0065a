"""
Todo API - Settings Tests
==========================
"""

import pydantic
import pytest

from todo_api.config import Settings


class TestSettings:

    def test_defaults_match_service_contract(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        settings = Settings(_env_file=None)

        assert settings.database_url == "sqlite+aiosqlite:///./db.sqlite"
        assert settings.backend_host == "0.0.0.0"
        assert settings.backend_port == 3000
        assert settings.log_level == "INFO"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("BACKEND_PORT", "8080")
        monkeypatch.setenv("db_busy_timeout", "0.5")

        settings = Settings(_env_file=None)

        assert settings.backend_port == 8080
        assert settings.db_busy_timeout == 0.5

    def test_log_level_is_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(pydantic.ValidationError, match="Invalid log_level"):
            Settings(log_level="LOUD")
