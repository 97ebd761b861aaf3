"""
Configuration management for the trip plan service.
Supports the Gemini REST API and an offline mock provider.
"""
from pydantic_settings import BaseSettings
from typing import Literal, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # LLM Configuration
    llm_provider: Literal["gemini", "mock"] = "gemini"
    google_api_key: Optional[str] = None  # Not needed for mock
    gemini_model: str = "gemini-2.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1"
    llm_timeout: float = 120.0

    # Retry Configuration
    max_retries: int = 3  # Total attempts, not extra ones
    retry_delay_ms: int = 1000

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 5000
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()


def get_llm_config() -> dict:
    """Get LLM configuration for the configured provider."""
    return {
        "api_key": settings.google_api_key,
        "model": settings.gemini_model,
        "base_url": settings.gemini_base_url.rstrip("/"),
        "timeout": settings.llm_timeout,
    }
