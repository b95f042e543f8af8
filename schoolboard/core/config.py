"""
Core configuration for the School Leaderboard service
Values are read from the environment and an optional .env file
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Application Settings
    APP_NAME: str = "School Leaderboard"
    APP_VERSION: str = "1.0.0"
    APP_DESCRIPTION: str = "Moodle-backed school leaderboard backend"
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="development")

    # Server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3000)

    # Moodle web service
    MOODLE_BASE_URL: str = Field(default="")
    MOODLE_TOKEN: str = Field(default="")

    # Leaderboard
    CACHE_TTL_SECONDS: int = Field(default=600, ge=0)
    LOGO_FOLDER: str = Field(default="public/logos")
    USE_MOCK: bool = Field(default=False)

    # CORS
    BACKEND_CORS_ORIGINS: str = Field(default="*")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"
    )

    # Sentry
    SENTRY_DSN: Optional[str] = Field(default=None)

    def moodle_configured(self) -> bool:
        """True when both the Moodle base URL and token are set"""
        return bool(self.MOODLE_BASE_URL and self.MOODLE_TOKEN)

    def get_cors_origins(self) -> list[str]:
        """Get CORS origins as list"""
        origins = [origin.strip() for origin in self.BACKEND_CORS_ORIGINS.split(",")]
        return [origin for origin in origins if origin] or ["*"]

    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


settings = Settings()
