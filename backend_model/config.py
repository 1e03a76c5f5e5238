"""
Configuration management using Pydantic Settings
"""

from functools import lru_cache
from typing import List, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application Configuration
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"
    logs_dir: str = "logs"
    log_to_file: bool = True
    log_rotation: str = "00:00"  # Daily at midnight
    log_retention: str = "3 days"
    error_log_retention: str = "14 days"

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: List[str] = ["*"]

    @field_validator('port')
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate listening port"""
        if v < 1 or v > 65535:
            raise ValueError('PORT must be between 1 and 65535')
        return v

    # Google Custom Search Configuration (only needed for /api/search)
    google_api_key: Optional[str] = None
    google_cx: Optional[str] = None
    google_search_url: str = "https://www.googleapis.com/customsearch/v1"
    search_result_limit: int = 5
    search_timeout: float = 8.0
    search_cache_ttl: float = 120.0

    @field_validator('search_result_limit')
    @classmethod
    def validate_result_limit(cls, v: int) -> int:
        """Custom Search returns at most 10 items per request"""
        if v < 1:
            raise ValueError('Search result limit must be at least 1')
        if v > 10:
            raise ValueError('Search result limit cannot exceed 10')
        return v

    @field_validator('search_timeout')
    @classmethod
    def validate_search_timeout(cls, v: float) -> float:
        """Validate search request timeout"""
        if v <= 0:
            raise ValueError('Search timeout must be positive')
        if v > 60:
            raise ValueError('Search timeout cannot exceed 60 seconds')
        return v

    @field_validator('search_cache_ttl')
    @classmethod
    def validate_cache_ttl(cls, v: float) -> float:
        if v <= 0:
            raise ValueError('Search cache TTL must be positive')
        return v

    # Chat Rate Limiting
    rate_limit_interval: float = 0.8  # Minimum seconds between accepted requests per client

    @field_validator('rate_limit_interval')
    @classmethod
    def validate_rate_limit_interval(cls, v: float) -> float:
        if v < 0:
            raise ValueError('Rate limit interval cannot be negative')
        return v

    # Dataset Configuration
    default_year: int = 2020
    value_precision: int = 6  # Decimal places kept on aggregated sums

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @property
    def search_configured(self) -> bool:
        """True when both Custom Search credentials are present"""
        return bool(self.google_api_key and self.google_cx)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Export settings for easy access
settings = get_settings()
