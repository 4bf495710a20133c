import pytest

from smartq.core.config import Settings


@pytest.fixture
def base_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://smartq:smartq@db:5432/smartq")
    monkeypatch.setenv("SECRET_KEY", "not-a-real-secret")
    for name in ("CORS_ORIGINS", "ENVIRONMENT", "LOG_LEVEL", "LOG_FILE_PATH", "ACCESS_TOKEN_EXPIRE_MINUTES"):
        monkeypatch.delenv(name, raising=False)


def test_defaults(base_env):
    settings = Settings.load_from_env()

    assert settings.DATABASE_URL.startswith("postgresql+asyncpg://")
    assert settings.CORS_ORIGINS == ["http://localhost:3000"]
    assert settings.ENVIRONMENT == "development"
    assert settings.LOG_LEVEL == "INFO"
    assert settings.LOG_FILE_PATH == "logs/app.log"
    assert settings.ACCESS_TOKEN_EXPIRE_MINUTES == 60


def test_overrides(base_env, monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example.com, https://b.example.com,")
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "15")

    settings = Settings.load_from_env()

    assert settings.CORS_ORIGINS == ["https://a.example.com", "https://b.example.com"]
    assert settings.ENVIRONMENT == "production"
    assert settings.ACCESS_TOKEN_EXPIRE_MINUTES == 15


@pytest.mark.parametrize("missing", ["DATABASE_URL", "SECRET_KEY"])
def test_missing_required_variable(base_env, monkeypatch, missing):
    monkeypatch.delenv(missing)

    with pytest.raises(ValueError) as exc_info:
        Settings.load_from_env()
    assert missing in str(exc_info.value)
