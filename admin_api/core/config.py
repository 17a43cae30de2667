"""
Application configuration settings
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Application Settings
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    ALLOWED_HOSTS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Remote admin API
    ADMIN_API_URL: Optional[str] = None
    REQUEST_TIMEOUT: float = 10.0  # seconds
    PAGE_SIZE: int = 100

    # Metrics
    COMMISSION_RATE: float = 0.10
    SELLER_EARNINGS_SHARE: float = 0.90
    TIMEZONE: str = "UTC"
    LOW_STOCK_THRESHOLD: int = 10

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def admin_api_url(self) -> str:
        return self.ADMIN_API_URL or "http://localhost:3001"


# Create settings instance
settings = Settings()

# Validate required settings in production
if settings.ENVIRONMENT == "production":
    required_settings = ["ADMIN_API_URL"]

    missing_settings = []
    for setting in required_settings:
        if not getattr(settings, setting):
            missing_settings.append(setting)

    if missing_settings:
        raise ValueError(f"Missing required production settings: {', '.join(missing_settings)}")
