"""
dumpstore example service configuration.
Single source of truth for environment and app settings.
"""

import os
from pathlib import Path
from typing import Union

from dotenv import load_dotenv

load_dotenv()


def get_settings():
    """Return app settings (use as FastAPI Depends or call directly)."""
    return Settings()


class Settings:
    """Application settings loaded from environment."""

    # App
    APP_TITLE: str = "dumpstore API"
    APP_VERSION: str = "1.0.0"
    ALLOWED_ORIGINS: list[str]
    LOG_LEVEL: str = "INFO"

    # Store: mode is "manual" | "on_write" | "interval"; the store validates it
    DUMPSTORE_PATH: Path
    DUMPSTORE_PERSIST: str = "on_write"
    DUMPSTORE_INTERVAL: Union[float, str] = 60.0

    def __init__(self):
        origins = os.environ.get("ALLOWED_ORIGINS", "*")
        self.ALLOWED_ORIGINS = [o.strip() for o in origins.split(",") if o.strip()]
        self.LOG_LEVEL = (os.environ.get("LOG_LEVEL") or "INFO").strip().upper()
        self.DUMPSTORE_PATH = Path(os.environ.get("DUMPSTORE_PATH", "posts.db"))
        self.DUMPSTORE_PERSIST = (os.environ.get("DUMPSTORE_PERSIST") or "on_write").strip().lower()
        # Unparsable values are kept as-is; the store rejects them in interval mode.
        interval = (os.environ.get("DUMPSTORE_INTERVAL") or "").strip()
        try:
            self.DUMPSTORE_INTERVAL = float(interval) if interval else 60.0
        except ValueError:
            self.DUMPSTORE_INTERVAL = interval
