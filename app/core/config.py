"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_name: str = "Internship Placement Scheduler"
    debug: bool = False
    log_level: str = "INFO"

    # Persistence
    # Empty database_url + empty postgres_host -> in-memory store (nothing persisted)
    database_url: str = ""
    postgres_host: str = ""
    postgres_port: int = 5432
    postgres_user: str = "placement_user"
    postgres_password: str = "password"
    postgres_db: str = "placement_db"

    # Load the demo companies/students when the store starts empty
    seed_demo_data: bool = False

    @property
    def sqlalchemy_url(self) -> str:
        """Explicit database_url wins, otherwise build a PostgreSQL URL if a host is set."""
        if self.database_url:
            return self.database_url
        if self.postgres_host:
            return (
                f"postgresql://{self.postgres_user}:{self.postgres_password}"
                f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
            )
        return ""

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
