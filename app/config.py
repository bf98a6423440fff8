"""
Application configuration settings
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.engine import TOP_PRODUCTS_LIMIT as DEFAULT_TOP_PRODUCTS_LIMIT


class Settings(BaseSettings):
    """Settings loaded from environment variables or a local .env file"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    APP_NAME: str = "Sales Performance Report Service"
    LOG_LEVEL: str = "INFO"

    # Report shaping
    TOP_PRODUCTS_LIMIT: int = Field(default=DEFAULT_TOP_PRODUCTS_LIMIT, ge=1)

    # Sample dataset served by /api/v1/reports/sales/sample
    SAMPLE_SEED: int = 42
    SAMPLE_SELLERS: int = Field(default=5, ge=1)
    SAMPLE_PRODUCTS: int = Field(default=20, ge=1)
    SAMPLE_RECORDS: int = Field(default=200, ge=1)


settings = Settings()
