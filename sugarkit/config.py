"""Configuration management using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    # Zone used when a conversion omits its zone argument
    default_zone: str = "UTC+8"
    # Pattern used when a conversion omits its format argument
    default_format: str = "yyyy-MM-dd HH:mm:ss"

    model_config = SettingsConfigDict(
        env_prefix="SUGARKIT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()
