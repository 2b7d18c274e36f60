"""Rota API Configuration."""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"  # Ignore extra fields from .env
    )

    DB_PATH: str = "db/rota.db"

    # JWT
    JWT_SECRET_KEY: str = "CHANGE_THIS_IN_PRODUCTION_12345678901234567890"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 360  # 6h

    # bcrypt cost factor
    BCRYPT_ROUNDS: int = 10

    # Calendar day/hour used by the shift policy
    TZ: str = "UTC"

    LOG_LEVEL: str = "INFO"


settings = Settings()
