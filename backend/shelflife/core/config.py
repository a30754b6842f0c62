"""Application configuration using Pydantic BaseSettings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    PROJECT_NAME: str = "Shelf-Life Tracker"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    BACKEND_HOST: str = "0.0.0.0"
    BACKEND_PORT: int = 8000
    API_PREFIX: str = "/api"

    # --- Database ---
    DATABASE_URL: str = "sqlite+aiosqlite:///./shelf_life.db"
    DB_ECHO: bool = False
    DB_POOL_TIMEOUT: float = 10.0
    DB_CONNECT_TIMEOUT: float = 10.0

    # --- Expiry ---
    # Calendar day boundaries used for "today" when classifying records
    REFERENCE_TIMEZONE: str = "UTC"

    # --- Demo data ---
    SEED_DEMO_DATA: bool = False

    # --- Logging ---
    LOG_LEVEL: str = "INFO"

    # --- CORS ---
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:8000"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


settings = Settings()
