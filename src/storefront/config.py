"""Configuration management for the application."""

import json
import os
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SlugConfig(BaseSettings):
    """Slug assignment configuration."""

    # Length of the slug column on products and categories
    max_length: int = Field(default=255, ge=16)
    # Inserts attempted before giving up on a random-suffix slug
    max_insert_attempts: int = Field(default=5, ge=1)

    @classmethod
    def from_file(cls, filepath: str = "config/slug.json") -> "SlugConfig":
        """
        Load slug configuration from JSON file.

        Args:
            filepath: Path to the configuration file

        Returns:
            SlugConfig instance (defaults when the file does not exist)
        """
        if not os.path.exists(filepath):
            return cls()
        with open(filepath, "r") as f:
            data = json.load(f)
        return cls(**data)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Data root — the SQLite DB lives here unless DATABASE_URL points elsewhere
    data_root: str = Field(default="~/.storefront")

    # Database — auto-derived from data_root if not explicitly set
    database_url: str | None = Field(default=None)

    # Backend Server
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000)

    # Frontend origins allowed by CORS
    cors_origins: list[str] = Field(default=["http://localhost:3000"])

    log_level: str = Field(default="INFO")

    @model_validator(mode="after")
    def derive_paths(self) -> "Settings":
        """Expand data_root and derive database_url if not explicitly set."""
        self.data_root = str(Path(self.data_root).expanduser().resolve())
        if self.database_url is None:
            self.database_url = f"sqlite:///{self.data_root}/storefront.db"
        return self


# Global settings instance
settings = Settings()

# Load configurations
slug_config = SlugConfig.from_file()
