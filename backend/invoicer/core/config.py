# invoicer/core/config.py
import logging
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_JWT_SECRET = "default_development_secret"


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    ENVIRONMENT: str = Field(default="development", description="development | production")
    PORT: int = 5000

    # Auth
    JWT_SECRET_KEY: Optional[str] = Field(default=None, description="Secret used to sign access tokens")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 24

    # MongoDB
    MONGO_URL: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "invoicer"
    MONGO_TIMEOUT_MS: int = 5000

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Logo uploads
    UPLOAD_DIR: str = "uploads"
    MAX_LOGO_SIZE: int = 5 * 1024 * 1024

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def jwt_secret(self) -> str:
        return self.JWT_SECRET_KEY or DEFAULT_JWT_SECRET


def warn_on_default_secret(config: Settings) -> bool:
    """Log loudly when tokens are signed with the development fallback secret."""
    if config.JWT_SECRET_KEY:
        return False
    if config.is_production:
        logger.error(
            "JWT_SECRET_KEY is not set: signing tokens with the default development secret "
            "in production. Set JWT_SECRET_KEY before exposing this service."
        )
    else:
        logger.warning("JWT_SECRET_KEY is not set, using the development fallback secret.")
    return True


settings = Settings()
