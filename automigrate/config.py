"""Configuration management for automigrate."""

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .types import Environment


class Settings(BaseModel):
    """Application settings."""

    # Environment
    version: str = Field(default="0.1.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development/production/testing)",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_to_file: bool = Field(
        default=False, description="Whether to also write logs to ./logs"
    )

    # Output locations
    migrations_dir: Path = Field(
        default=Path("database", "migrations"),
        description="Directory that receives migration files and the snapshot",
    )
    snapshot_filename: str = Field(
        default="meta.json", description="Snapshot file name inside migrations_dir"
    )

    # Model discovery
    models_module: str = Field(
        default="app.models",
        description="Python module scanned for SQLModel table classes",
    )

    # Rendering
    line_length: int = Field(
        default=120, ge=40, description="Line length for formatted migrations"
    )

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        # Test runs always log verbosely
        if self.environment == Environment.TESTING:
            self.log_level = "DEBUG"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == Environment.TESTING

    @property
    def snapshot_path(self) -> Path:
        """Full path of the snapshot file."""
        return self.migrations_dir / self.snapshot_filename


def load_settings() -> Settings:
    """Load settings from environment variables."""

    # Load .env file if it exists
    load_dotenv()

    log_to_file = os.getenv("AUTOMIGRATE_LOG_TO_FILE", "false").lower() in [
        "true",
        "1",
        "yes",
        "on",
    ]

    return Settings(
        environment=Environment(os.getenv("AUTOMIGRATE_ENV", "development")),
        log_level=os.getenv("AUTOMIGRATE_LOG_LEVEL", "INFO").upper(),
        log_to_file=log_to_file,
        migrations_dir=Path(
            os.getenv("AUTOMIGRATE_MIGRATIONS_DIR", str(Path("database", "migrations")))
        ),
        snapshot_filename=os.getenv("AUTOMIGRATE_SNAPSHOT_FILENAME", "meta.json"),
        models_module=os.getenv("AUTOMIGRATE_MODELS_MODULE", "app.models"),
        line_length=int(os.getenv("AUTOMIGRATE_LINE_LENGTH", "120")),
    )


# Global settings instance
settings = load_settings()
