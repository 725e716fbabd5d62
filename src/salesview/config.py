"""Configuration system using pydantic-settings with environment variable loading."""

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class SalesApiSettings(BaseSettings):
    """Remote sales API connection settings."""

    model_config = SettingsConfigDict(env_prefix="SALES_API_")

    base_url: str = "http://localhost:8000"
    username: str = ""
    password: SecretStr = SecretStr("")
    page_limit: int = 50  # records per page requested from the server
    request_timeout_seconds: float = 30.0


class DashboardSettings(BaseSettings):
    """Dashboard API server configuration."""

    model_config = SettingsConfigDict(env_prefix="DASHBOARD_")

    host: str = "0.0.0.0"
    port: int = 8080
    enabled: bool = True


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    log_format: str = "console"  # "json" for machine-readable output
    sales_api: SalesApiSettings = SalesApiSettings()
    dashboard: DashboardSettings = DashboardSettings()
