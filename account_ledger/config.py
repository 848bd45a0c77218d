"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings


class LedgerConfig(BaseSettings):
    """Account ledger service configuration"""

    # API configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8090
    api_prefix: str = "/api/v1/accounts"
    enable_docs: bool = True

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text

    # Request validation (enforced by the HTTP layer, not the core)
    account_id_length: int = 10
    description_min_length: int = 1
    description_max_length: int = 100

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
