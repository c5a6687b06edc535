"""Application configuration"""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from FORM_ENGINE_* env vars or .env"""

    model_config = SettingsConfigDict(
        env_prefix="FORM_ENGINE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = "INFO"

    # Auto-save
    autosave_enabled: bool = True
    autosave_path: str = ".form_engine_autosave.json"

    # Mock API; None means the deterministic 400-800ms latency
    mock_api_delay_ms: Optional[int] = None
    mock_api_fail_rate: float = 0.0

    # Gradio server
    server_name: str = "127.0.0.1"
    server_port: int = 7860


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
