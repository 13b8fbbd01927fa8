# core/config.py
import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load .env
load_dotenv()

# BASE_DIR is the /api folder, not /api/core
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# ---- ENV VALUES ----
SCRIPTURE_DB = os.getenv("SCRIPTURE_DB", os.path.join(BASE_DIR, "scripture.db"))
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "5055"))
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the scripture API."""
    db_path: str
    host: str
    port: int
    cors_origins: tuple
    log_level: str


def _split_origins(value: str) -> tuple:
    origins = tuple(origin.strip() for origin in value.split(",") if origin.strip())
    return origins or ("*",)


def get_settings() -> Settings:
    """
    Read settings from the environment.

    Read at call time rather than import time so an overridden
    environment (tests, CLI flags) is picked up.
    """
    return Settings(
        db_path=os.getenv("SCRIPTURE_DB", SCRIPTURE_DB),
        host=os.getenv("API_HOST", API_HOST),
        port=int(os.getenv("API_PORT", str(API_PORT))),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS", CORS_ORIGINS)),
        log_level=os.getenv("LOG_LEVEL", LOG_LEVEL).upper(),
    )
