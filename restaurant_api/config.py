from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

_DEFAULT_DATA_DIR = Path(__file__).resolve().parent / "data"


def _split_origins(raw: str) -> tuple[str, ...]:
    return tuple(o.strip() for o in raw.split(",") if o.strip())


@dataclass(frozen=True)
class AppConfig:
    """
    Runtime settings for the API process.

    Values are read from the environment once at import time; tests build
    their own instances instead of mutating the environment.
    """

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))
    environment: str = os.getenv("APP_ENV", "production")
    data_dir: Path = Path(os.getenv("DATA_DIR", str(_DEFAULT_DATA_DIR)))
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    cors_origins: tuple[str, ...] = field(
        default_factory=lambda: _split_origins(os.getenv("CORS_ORIGINS", "*"))
    )
    restaurants_filename: str = "restaurants.json"
    reviews_filename: str = "reviews.json"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


DEFAULT_APP_CONFIG = AppConfig()
