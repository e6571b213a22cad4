"""
Verse Graph API — Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for development.
    Production deployments MUST set ARANGO_PASSWORD and ENVIRONMENT.
    """

    # ── ArangoDB ──────────────────────────────────────────────────────────
    # Format: http://host:port (comma-separated for a cluster coordinator list)
    arango_url: str = Field(
        default="http://localhost:8529",
        description="ArangoDB HTTP endpoint(s)",
    )
    arango_db: str = Field(default="verse_graph", description="Database name")
    arango_username: str = Field(default="root")
    arango_password: str = Field(default="")

    # ── Collections ───────────────────────────────────────────────────────
    # Extra collections provisioned alongside the routed ones (verse, source,
    # hasSource), which are always provisioned (see verse_graph.provisioning)
    document_collections: str = Field(default="verse,source")
    edge_collections: str = Field(default="hasSource")
    provision_on_startup: bool = Field(default=True)

    @property
    def document_collections_list(self) -> List[str]:
        return _split_csv(self.document_collections)

    @property
    def edge_collections_list(self) -> List[str]:
        return _split_csv(self.edge_collections)

    # ── Execution Mode ────────────────────────────────────────────────────
    # Valid: development, production, test
    environment: str = Field(default="development")

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return _split_csv(self.cors_origins)

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

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
        "case_sensitive": False,  # ARANGO_URL and arango_url both work
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that critical settings are configured.
        When:  Called during app startup (lifespan).
        How:   Checks each required field and raises ValueError with guidance.
        """
        errors = []
        if self.is_production and not self.arango_password:
            errors.append(
                "ARANGO_PASSWORD is not set. "
                "Production deployments must authenticate against ArangoDB."
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
