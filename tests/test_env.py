"""
Tests for environment configuration.
"""

from pathlib import Path

from jobly.env import (
    DEFAULT_DATABASE_URL,
    DEFAULT_TEST_DATABASE_URL,
    get_database_url,
    get_log_dir,
    get_log_level,
    load_env,
)


class TestDatabaseUrl:

    def test_default(self, monkeypatch):
        monkeypatch.delenv("JOBLY_ENV", raising=False)
        monkeypatch.delenv("DATABASE_URL", raising=False)
        assert get_database_url() == DEFAULT_DATABASE_URL

    def test_from_env(self, monkeypatch):
        monkeypatch.delenv("JOBLY_ENV", raising=False)
        monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/jobly")
        assert get_database_url() == "postgresql://localhost/jobly"

    def test_test_env_uses_separate_database(self, monkeypatch):
        monkeypatch.setenv("JOBLY_ENV", "test")
        monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/jobly")
        monkeypatch.delenv("DATABASE_URL_TEST", raising=False)
        assert get_database_url() == DEFAULT_TEST_DATABASE_URL

    def test_test_env_override(self, monkeypatch):
        monkeypatch.setenv("JOBLY_ENV", "test")
        monkeypatch.setenv("DATABASE_URL_TEST", "postgresql://localhost/jobly_test")
        assert get_database_url() == "postgresql://localhost/jobly_test"


class TestLogSettings:

    def test_level_default(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert get_log_level() == "INFO"

    def test_level_uppercased(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        assert get_log_level() == "WARNING"

    def test_log_dir(self, monkeypatch):
        monkeypatch.setenv("LOG_DIR", "var/log")
        assert get_log_dir() == Path("var/log")

    def test_log_dir_unset(self, monkeypatch):
        monkeypatch.setenv("LOG_DIR", "  ")
        assert get_log_dir() is None


class TestLoadEnv:

    def test_loads_dotenv(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("JOBLY_DOTENV_CHECK", raising=False)
        (tmp_path / ".env").write_text("JOBLY_DOTENV_CHECK=loaded\n")

        load_env()

        import os
        assert os.environ["JOBLY_DOTENV_CHECK"] == "loaded"
        monkeypatch.delenv("JOBLY_DOTENV_CHECK")

    def test_existing_env_wins(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("JOBLY_DOTENV_CHECK", "process")
        (tmp_path / ".env").write_text("JOBLY_DOTENV_CHECK=file\n")

        load_env()

        import os
        assert os.environ["JOBLY_DOTENV_CHECK"] == "process"

    def test_missing_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        load_env()
