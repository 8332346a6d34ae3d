from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional
import os
from pathlib import Path


class Settings(BaseSettings):
    # App
    app_name: str = "Fundraiser Service API"
    service_name: str = "fundraiser-service"
    environment: str = "development"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["*"]

    # Logging
    log_level: str = "INFO"
    json_logs: bool = True

    # Donations
    max_donation_amount: float = 100_000

    # Pagination
    default_page_size: int = 10
    default_donation_page_size: int = 20

    # Tracing
    tracing_enabled: bool = False
    otlp_endpoint: Optional[str] = None

    model_config = SettingsConfigDict(
        # Look for .env file in the project root
        env_file=os.path.join(Path(__file__).parent.parent.parent, ".env"),
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


@lru_cache()
def get_settings():
    return Settings()
