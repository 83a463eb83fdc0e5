"""Configuration management for docweave."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _parse_cors_origins() -> list[str]:
    """Parse CORS origins from environment variable."""
    cors_env = os.getenv("CORS_ALLOW_ORIGINS")
    if cors_env:
        return cors_env.split(",")
    return ["*"]


class Settings(BaseModel):
    """Application settings."""

    # Server settings
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"

    # CORS settings (comma-separated list of allowed origins, or * for all)
    cors_allow_origins: list[str] = _parse_cors_origins()

    # Root logger level used by the CLI
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Maximum reference suggestions returned while typing a placeholder
    autocomplete_limit: int = int(os.getenv("AUTOCOMPLETE_LIMIT", "10"))

    # Largest snapshot the API accepts in one request
    max_snapshot_documents: int = int(os.getenv("MAX_SNAPSHOT_DOCUMENTS", "5000"))


settings = Settings()
