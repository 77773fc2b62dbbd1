from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    ENV: str = Field(default="dev")  # dev|prod|test

    # Security
    JWT_SECRET: str = Field(default="change-me")
    JWT_ALG: str = Field(default="HS256")
    JWT_EXPIRES_MIN: int = Field(default=60 * 12)

    # DB
    DATABASE_URL: str = Field(default="postgresql+psycopg://app:app@db:5432/app")

    # CORS
    CORS_ORIGINS: str = Field(default="http://localhost:3000,http://localhost")

    # Cache
    CACHE_BACKEND: str = Field(default="memory")  # memory|redis
    REDIS_URL: str = Field(default="redis://redis:6379/0")
    CACHE_NAMESPACE: str = Field(default="projectboard")
    CACHE_TTL_SECONDS: int | None = Field(default=60 * 60 * 24)

    # Locale
    DEFAULT_LOCALE: str = Field(default="en")
    AVAILABLE_LOCALES: str = Field(default="en,de,fr")

    # Seed (dev)
    SEED_DEMO: bool = Field(default=True)
    DEMO_ADMIN_LOGIN: str = Field(default="admin")
    DEMO_ADMIN_PASSWORD: str = Field(default="admin123")

    @property
    def locales(self) -> list[str]:
        return [l.strip() for l in self.AVAILABLE_LOCALES.split(",") if l.strip()]


settings = Settings()
