"""
Formulario Backend — Application Configuration
================================================

What:  Centralized configuration management using Pydantic Settings.
Why:   The store address, listening port and CORS policy used to be hardcoded
       constants. They keep those values as defaults but can be overridden
       per deployment without touching code.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every setting has a default matching the original single-host deployment,
    so the service runs with no environment at all.
    """

    # ── MongoDB ───────────────────────────────────────────────────────────
    # What: Connection string for the document store (default local port)
    mongodb_url: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URL",
    )
    mongodb_database: str = Field(default="formulario")
    mongodb_collection: str = Field(default="usuarios")

    # What: Passed to the driver as serverSelectionTimeoutMS when set
    # None keeps the driver default; no request timeout is configured on top
    server_selection_timeout_ms: Optional[int] = Field(default=None, ge=1)

    # ── CORS ──────────────────────────────────────────────────────────────
    # What: Allowed origins for cross-origin requests
    # Default "*": any origin may post the form
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1, le=65535)

    # What: Address announced in the startup log line
    # The listener itself always binds backend_host:backend_port
    public_url: str = Field(default="http://localhost:3000")

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

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # MONGODB_URL and mongodb_url both work
    }


# Singleton instance, imported throughout the application
settings = Settings()
