# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    DATABASE_URL: str = Field(default="sqlite:///./portal.db")
    APP_NAME: str = "ГородОк"
    APP_DESC: str = "Портал благоустройства территорий"
    APP_VERSION: str = "1.0.0"

    # CORS origins, comma separated
    CORS_ORIGINS: str | None = None

    # Demo credential check: any existing login + one of these passwords
    ACCEPTED_PASSWORDS: list[str] = ["password", "123456"]
    MIN_PASSWORD_LENGTH: int = 6

    # ru-RU toLocaleString() form
    CREATED_AT_FORMAT: str = "%d.%m.%Y, %H:%M:%S"

    # Seeded administrator (id 1)
    ADMIN_LOGIN: str = "admin"
    ADMIN_FULL_NAME: str = "Администратор"
    ADMIN_EMAIL: str = "admin@test.ru"
    ADMIN_PHONE: str = "+7 (900)000-00-00"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None
    LOG_FORMAT: str = "console"  # "console" or "json"

    # Pydantic v2 style config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def get_cors_origins(self) -> list[str]:
        if not self.CORS_ORIGINS:
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
