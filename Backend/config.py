"""
LiftLog Configuration
Load environment variables and define app settings.
"""
import logging
from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache

logger = logging.getLogger(__name__)

# Used for activation and calorie estimates when the user profile has no weight.
DEFAULT_BODY_WEIGHT_KG = 70.0


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    APP_NAME: str = "LiftLog"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # MongoDB
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB_NAME: str = "liftlog"

    # Workout timer
    TIMER_TICK_SECONDS: float = 1.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Quick access
settings = get_settings()


def resolve_body_weight(weight_kg: Optional[float]) -> float:
    """Return the profile weight, or DEFAULT_BODY_WEIGHT_KG when it is unknown."""
    if weight_kg is None or weight_kg <= 0:
        logger.info("[Config] No body weight on profile, using %.1fkg", DEFAULT_BODY_WEIGHT_KG)
        return DEFAULT_BODY_WEIGHT_KG
    return float(weight_kg)


def configure_logging(level: Optional[str] = None):
    """Configure root logging for scripts and services."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ============================================================
# Example .env file (create this in your project root):
# ============================================================
"""
# MongoDB (personal-record batches need a replica set for transactions)
MONGODB_URI=mongodb://localhost:27017/?replicaSet=rs0
MONGODB_DB_NAME=liftlog

# Logging
LOG_LEVEL=INFO

# Workout timer interval in seconds
TIMER_TICK_SECONDS=1.0
"""
