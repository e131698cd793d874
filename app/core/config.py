"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "placement_user"
    postgres_password: str = "password"
    postgres_db: str = "placement_db"

    # Full SQLAlchemy URL, overrides the postgres_* fields when set
    database_url: Optional[str] = None

    # MongoDB (recommendation logs)
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "placement_docs"

    # JWT issued by the identity provider (we only verify)
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_audience: Optional[str] = "authenticated"

    # Recommendation scoring - cold start priors
    cold_start_skill_score_with_skills: float = 50
    cold_start_skill_score_without_skills: float = 25
    cold_start_interest_score: float = 50
    unmatched_interest_score: float = 25
    recommendation_log_enabled: bool = True

    # App
    debug: bool = False
    log_level: str = "INFO"
    auto_create_schema: bool = False

    @property
    def postgres_url(self) -> str:
        """Construct PostgreSQL connection URL"""
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def sqlalchemy_url(self) -> str:
        return self.database_url or self.postgres_url

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
