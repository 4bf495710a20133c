import os
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class Settings(BaseModel):
    DATABASE_URL: str
    SECRET_KEY: str
    CORS_ORIGINS: List[str]
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_FILE_PATH: str = "logs/app.log"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    @classmethod
    def load_from_env(cls):
        database_url = os.getenv("DATABASE_URL")
        secret_key = os.getenv("SECRET_KEY")
        environment = os.getenv("ENVIRONMENT", "development")
        log_level = os.getenv("LOG_LEVEL", "INFO")
        log_file_path = os.getenv("LOG_FILE_PATH", "logs/app.log")
        token_expire_minutes = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

        cors_origins_str = os.getenv("CORS_ORIGINS", "http://localhost:3000")
        cors_origins = [origin.strip() for origin in cors_origins_str.split(",") if origin.strip()]

        missing = []
        if not database_url:
            missing.append("DATABASE_URL")
        if not secret_key:
            missing.append("SECRET_KEY")

        if missing:
            raise ValueError(f"Missing required environment variables: {', '.join(missing)}")

        return cls(
            DATABASE_URL=database_url,
            SECRET_KEY=secret_key,
            CORS_ORIGINS=cors_origins,
            ENVIRONMENT=environment,
            LOG_LEVEL=log_level,
            LOG_FILE_PATH=log_file_path,
            ACCESS_TOKEN_EXPIRE_MINUTES=token_expire_minutes,
        )


# Loaded at import time so a misconfigured deployment fails on startup.
# Tests must opt in explicitly (TEST_MODE=true or running under pytest).
_is_test_mode = os.getenv("TEST_MODE", "").lower() == "true" or os.getenv("PYTEST_CURRENT_TEST") is not None

try:
    settings = Settings.load_from_env()
except ValueError as e:
    if _is_test_mode:
        import secrets
        settings = Settings(
            DATABASE_URL=os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:"),
            SECRET_KEY=os.getenv("TEST_SECRET_KEY") or secrets.token_urlsafe(32),
            CORS_ORIGINS=["http://localhost:3000"],
            ENVIRONMENT="test",
        )
    else:
        print(f"CRITICAL: Configuration Error: {e}")
        print("Please set the required environment variables: DATABASE_URL, SECRET_KEY")
        raise e
