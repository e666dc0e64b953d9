# tests/test_config.py
import pytest

from freelancehub.config import Settings


def test_defaults_use_memory_storage(monkeypatch):
    for name in ("DATABASE_URL", "FREELANCEHUB_HOST", "FREELANCEHUB_PORT",
                 "FREELANCEHUB_LOG_LEVEL", "FREELANCEHUB_SEED_DEMO_DATA"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings.database_url is None
    assert settings.uses_database is False
    assert settings.port == 8000
    assert settings.log_level == "INFO"
    assert settings.seed_demo_data is True


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://app@db/freelancehub")
    monkeypatch.setenv("FREELANCEHUB_PORT", "9090")
    monkeypatch.setenv("FREELANCEHUB_LOG_LEVEL", "debug")
    monkeypatch.setenv("FREELANCEHUB_SEED_DEMO_DATA", "no")

    settings = Settings.from_env()

    assert settings.uses_database is True
    assert settings.port == 9090
    assert settings.log_level == "DEBUG"
    assert settings.seed_demo_data is False


def test_blank_database_url_means_memory(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "   ")
    assert Settings.from_env().database_url is None


def test_invalid_port(monkeypatch):
    monkeypatch.setenv("FREELANCEHUB_PORT", "eighty")
    with pytest.raises(ValueError):
        Settings.from_env()
