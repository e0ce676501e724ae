"""
Application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # App
    app_name: str = "Transaction Tracker"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./data/transactions.db"

    # AI Provider
    ai_provider: str = "openai"  # openai, openrouter, ollama, anthropic
    ai_model: str = "gpt-4o-mini"
    ai_base_url: Optional[str] = None  # For Ollama: http://localhost:11434
    ai_temperature: float = 0.3
    ai_max_tokens: int = 1500
    ai_timeout_seconds: float = 30.0

    # API Keys (optional based on provider)
    openai_api_key: Optional[str] = None
    openrouter_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    frontend_url: str = "http://localhost:8080"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
