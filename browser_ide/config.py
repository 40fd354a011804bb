"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file without clobbering the real environment
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: Literal["development", "staging", "production"] = "development"
    app_debug: bool = True

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Subhosting API
    deploy_access_token: str = Field(default="")
    deploy_org_id: str = Field(default="")
    subhosting_endpoint: str = "https://api.deno.com/v1"
    subhosting_timeout: float | None = None  # None waits forever

    # Dashboard
    poll_interval_ms: int = Field(default=5000, gt=0)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["console", "json"] = "console"
    log_directory: str = "logs"
    log_file_name: str = "browser_ide.log"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
