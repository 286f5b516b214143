import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from ..errors import ConfigurationError

# Load .env file from the project root
# This file: src/langvec/config/settings.py
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent
ENV_PATH = PROJECT_ROOT / ".env"

if ENV_PATH.exists():
    load_dotenv(ENV_PATH)
else:
    # Fallback to simple load_dotenv which looks in cwd
    load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Global vector store settings"""

    LOG_LEVEL: str = Field(default="INFO", description="Log level")

    # Validate vector length against VectorStoreVector(dimensions=...) on upsert.
    # Off by default: mismatches surface at search time.
    STRICT_DIMENSIONS: bool = Field(default=False, description="Eager dimension validation")

    SEARCH_TIMING_THRESHOLD_MS: float = Field(
        default=100.0, ge=0.0, description="Log searches slower than this"
    )

    model_config = {
        "frozen": True,
    }


def load_settings() -> Settings:
    """Load settings from environment variables.

    Raises:
        ConfigurationError: If a variable holds a value the Settings model rejects
    """
    try:
        return Settings(
            LOG_LEVEL=os.getenv("LANGVEC_LOG_LEVEL", "INFO"),
            STRICT_DIMENSIONS=os.getenv("LANGVEC_STRICT_DIMENSIONS", "false").strip().lower() in _TRUTHY,
            SEARCH_TIMING_THRESHOLD_MS=os.getenv("LANGVEC_SEARCH_TIMING_THRESHOLD_MS", "100"),
        )
    except ValidationError as e:
        fields = [".".join(str(part) for part in error["loc"]) for error in e.errors()]
        raise ConfigurationError(
            f"Invalid LangVec settings in environment: {', '.join(fields)}",
            details={"fields": fields},
            original_error=e,
        ) from e


def get_settings() -> Settings:
    """Return the active settings instance."""
    return settings


def configure_logging(level: str | None = None) -> None:
    """Route loguru output to stderr at the given (or configured) level."""
    logger.remove()
    logger.add(sys.stderr, level=(level or settings.LOG_LEVEL).upper())


# Global settings instance
settings = load_settings()
