"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
Monetary limits are policy constants in accounts.py and are not configurable here.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class LedgerConfig(BaseSettings):
    """Banking ledger configuration"""

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stderr
    logger_name: str = "banking_ledger"

    # Session configuration (presentation layer)
    session_idle_warning_seconds: int = 180  # 3 minutes

    class Config:
        env_prefix = "LEDGER_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = LedgerConfig()


def get_config() -> LedgerConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> LedgerConfig:
    """Reload configuration from environment"""
    global config
    config = LedgerConfig()
    return config
