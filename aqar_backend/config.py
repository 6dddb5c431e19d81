"""
Configuration management for the Aqar property management backend.
Loads settings from a YAML configuration file or the environment.
"""

import os

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings

PRODUCTION_ENV = "production"


class Settings(BaseSettings):
    """Application settings loaded from YAML config files or environment."""

    # Application
    app_env: str = Field(default="development", alias="APP_ENV")
    app_debug: bool = Field(default=False, alias="APP_DEBUG")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")

    # Logging Configuration
    log_to_file: bool = Field(default=False, alias="LOG_TO_FILE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file_path: str = Field(default="logs/app.log", alias="LOG_FILE_PATH")
    log_format: str = Field(default="json", alias="LOG_FORMAT")
    log_max_bytes: int = Field(default=50 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 50MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./dev.db",
        alias="DATABASE_URL",
    )
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")
    database_ssl_check_hostname: bool = Field(
        default=True, alias="DATABASE_SSL_CHECK_HOSTNAME"
    )
    database_ssl_verify_cert: bool = Field(
        default=True, alias="DATABASE_SSL_VERIFY_CERT"
    )
    database_ssl_verify_identity: bool = Field(
        default=True, alias="DATABASE_SSL_VERIFY_IDENTITY"
    )

    # API Configuration
    api_prefix: str = Field(default="/api", alias="API_PREFIX")
    api_title: str = Field(default="Aqar Property Records API", alias="API_TITLE")

    # CORS
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")

    # Frontend build served for unmatched routes (optional)
    static_dir: str | None = Field(default=None, alias="STATIC_DIR")

    # Credentials
    password_hash_rounds: int = Field(default=10, alias="PASSWORD_HASH_ROUNDS")
    default_user_password: str = Field(
        default="password", alias="DEFAULT_USER_PASSWORD"
    )

    # Demo mode
    seed_on_startup: bool = Field(default=True, alias="SEED_ON_STARTUP")
    reset_interval_seconds: float = Field(
        default=4 * 60 * 60, alias="RESET_INTERVAL_SECONDS"
    )  # 4 hours

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "allow"
        populate_by_name = True

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == PRODUCTION_ENV

    @property
    def demo_reset_enabled(self) -> bool:
        """Periodic demo resets never run in production."""
        return not self.is_production and self.reset_interval_seconds > 0

    @classmethod
    def from_yaml(cls, config_path: str) -> "Settings":
        """Load settings from YAML file."""
        with open(config_path) as f:
            config_data = yaml.safe_load(f) or {}
        return cls(**config_data)


def get_settings() -> Settings:
    """Get settings instance.

    When the CONFIG environment variable is set, settings are read from the
    YAML file it points to; otherwise they come from the environment.

    Raises:
        FileNotFoundError: If CONFIG points to a missing file
    """
    config_path = os.getenv("CONFIG")

    if not config_path:
        return Settings()

    if not os.path.exists(config_path):
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\n"
            f"Please check the CONFIG environment variable points to a valid file."
        )

    return Settings.from_yaml(config_path)


# Load settings at import time
settings = get_settings()
