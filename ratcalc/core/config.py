"""
Application configuration.

Centralized configuration management with environment variables.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_prefix="RATCALC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "text"
    LOG_FILE: Optional[str] = None

    # Operator table (YAML); the bundled table is used when unset
    OPERATORS_FILE: Optional[str] = None

    # REPL
    PROMPT: str = ">> "
    SHOW_TOKENS: bool = True
    SHOW_POSTFIX: bool = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
