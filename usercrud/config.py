"""
UserCRUD - Application Configuration
=====================================

What:  Settings loaded from the environment with Pydantic Settings, plus the
       fixed connection constants of the application.
How:   `Settings` reads PORT and LOG_LEVEL from the environment (or a .env
       file) and validates them; everything else is a module constant.
Who:   Imported by main.py, database.py and the entry point.

Only the HTTP port is meant to be changed per deployment. The MongoDB
location and the collection name are part of the application itself.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# ── Fixed constants ───────────────────────────────────────────────────────
HOST = "localhost"

MONGO_HOST = "localhost"
MONGO_PORT = 27017
MONGO_URL = f"mongodb://{MONGO_HOST}"
MONGO_DB_NAME = "project"
MONGO_COLLECTION = "users"

DEFAULT_PORT = 3000


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        port:       HTTP listener port (env PORT, default 3000)
        log_level:  Root logging level (env LOG_LEVEL, default INFO)
    """

    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def mongo_uri(self) -> str:
        """Full connection string handed to AsyncMongoClient."""
        return f"{MONGO_URL}:{MONGO_PORT}"


# Singleton instance, imported throughout the application
settings = Settings()
