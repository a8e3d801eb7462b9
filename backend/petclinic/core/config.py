"""Module: config."""

from pathlib import Path

from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).resolve().parent.parent


# Centralized runtime configuration loaded from environment variables.
class Settings(BaseSettings):
    # SQLAlchemy connection string; SQLite file by default for local dev.
    database_url: str = "sqlite:///./petclinic.db"
    # Echo emitted SQL through the sqlalchemy.engine logger.
    sql_echo: bool = False
    # Root level handed to logging.basicConfig at startup.
    log_level: str = "INFO"
    # Directory holding the Jinja2 view templates.
    templates_dir: Path = PACKAGE_DIR / "templates"

    # Configure pydantic-settings to also load values from local .env file.
    class Config:
        env_file = ".env"

# Global settings instance imported by app modules at runtime.
settings = Settings()
