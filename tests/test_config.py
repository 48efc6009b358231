"""
Tests for config.py - environment-driven settings.
"""

from pathlib import Path

from jobly.config import DEFAULT_DATABASE_URL, Settings, get_settings, reset_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("DATABASE_URL", "SECRET_KEY", "LOG_LEVEL", "LOG_DIR", "LOG_TO_FILE", "PORT"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings.database_url == DEFAULT_DATABASE_URL
        assert settings.secret_key == "secret-dev"
        assert settings.log_level == "INFO"
        assert settings.log_dir == Path("logs")
        assert settings.log_to_file is False
        assert settings.port == 3001

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/jobly")
        monkeypatch.setenv("SECRET_KEY", "s3cret")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("LOG_DIR", "/tmp/jobly-logs")
        monkeypatch.setenv("LOG_TO_FILE", "yes")
        monkeypatch.setenv("PORT", "8080")

        settings = Settings.from_env()

        assert settings.database_url == "postgresql://localhost/jobly"
        assert settings.secret_key == "s3cret"
        assert settings.log_level == "DEBUG"
        assert settings.log_dir == Path("/tmp/jobly-logs")
        assert settings.log_to_file is True
        assert settings.port == 8080


class TestGetSettings:
    def test_cached(self):
        assert get_settings() is get_settings()

    def test_reset_rereads_environment(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("SECRET_KEY", "rotated")

        assert get_settings().secret_key == first.secret_key

        reset_settings()
        assert get_settings().secret_key == "rotated"

    def test_loads_dotenv(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("PORT", raising=False)
        (tmp_path / ".env").write_text("PORT=4321\n")
        reset_settings()

        assert get_settings().port == 4321
