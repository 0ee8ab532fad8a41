"""Configuration management using Pydantic Settings"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "fintech-agent-api"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    # Store
    seed_demo_data: bool = True
    default_currency: str = "GHS"

    # Lifecycle
    airtime_completion_delay_seconds: float = 2.0
    kyc_validity_days: int = 365

    # Scoring
    credit_score_seed: Optional[int] = None


settings = Settings()
