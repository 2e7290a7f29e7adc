"""
Bitespeed configuration settings
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Store
    database_path: str = Field(default="contacts.db", alias="BITESPEED_DB_PATH")
    db_timeout: float = Field(
        default=30.0,
        alias="BITESPEED_DB_TIMEOUT",
        description="Seconds a request waits for the sqlite write lock"
    )

    # Server
    host: str = Field(default="0.0.0.0", alias="BITESPEED_HOST")
    port: int = Field(default=8000, alias="BITESPEED_PORT")

    log_level: str = Field(default="INFO", alias="BITESPEED_LOG_LEVEL")


settings = Settings()
