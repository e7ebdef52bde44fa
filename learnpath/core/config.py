"""Application configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    APP_NAME: str = "LearnPath"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENV: str = "development"

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./learnpath.db"
    DATABASE_ECHO: bool = False

    # AI
    OPENAI_API_KEY: str | None = None
    OPENAI_API_BASE_URL: str | None = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_JSON_MODE: bool = True

    # Generation budgets
    GENERATION_TEMPERATURE: float = 0.7
    ROADMAP_MAX_TOKENS: int = 2000
    CERTIFICATION_MAX_TOKENS: int = 1500

    # Auth
    AUTH_BACKEND: str = "guest"  # guest | jwt
    JWT_SECRET: str | None = None
    JWT_ALGORITHM: str = "HS256"
    JWT_USER_CLAIM: str = "userId"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENV == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
