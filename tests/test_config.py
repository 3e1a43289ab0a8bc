"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from betterspecs.config import BUILTIN_CONTENT_DIR, get_settings, reset_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("BETTERSPECS_CONTENT_DIR", "BETTERSPECS_SEARCH_THRESHOLD", "BETTERSPECS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


class TestSettings:
    """Tests for Settings and the get_settings singleton."""

    def test_defaults(self):
        settings = get_settings()

        assert settings.BETTERSPECS_CONTENT_DIR is None
        assert settings.content_dir == BUILTIN_CONTENT_DIR
        assert settings.BETTERSPECS_SEARCH_THRESHOLD == 0.3
        assert settings.BETTERSPECS_LOG_LEVEL == "WARNING"

    def test_builtin_content_is_packaged(self):
        assert (BUILTIN_CONTENT_DIR / "guidelines").is_dir()
        assert (BUILTIN_CONTENT_DIR / "examples.yaml").is_file()

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("BETTERSPECS_CONTENT_DIR", str(tmp_path))
        monkeypatch.setenv("BETTERSPECS_SEARCH_THRESHOLD", "0.1")

        settings = get_settings()

        assert settings.content_dir == tmp_path
        assert settings.BETTERSPECS_SEARCH_THRESHOLD == 0.1

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("BETTERSPECS_LOG_LEVEL=DEBUG\nUNRELATED=1\n")
        assert get_settings().BETTERSPECS_LOG_LEVEL == "DEBUG"

    def test_singleton(self):
        assert get_settings() is get_settings()

    def test_reset(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("BETTERSPECS_LOG_LEVEL", "INFO")
        reset_settings()

        second = get_settings()

        assert second is not first
        assert second.BETTERSPECS_LOG_LEVEL == "INFO"

    def test_invalid_value(self, monkeypatch):
        monkeypatch.setenv("BETTERSPECS_SEARCH_THRESHOLD", "high")
        with pytest.raises(ValidationError):
            get_settings()
