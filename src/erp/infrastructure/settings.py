"""Application settings read from environment variables."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


def _data_dir() -> Path:
    """ERP_DATA_DIR, else ./data under the current working directory."""
    configured = os.getenv("ERP_DATA_DIR")
    return Path(configured) if configured else Path.cwd() / "data"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


class Settings:
    DATA_DIR: Path = _data_dir()
    DATA_FILE: str = os.getenv("ERP_DATA_FILE", "erp.json")

    # Total attempts for a settlement that keeps hitting concurrent writes
    SETTLEMENT_ATTEMPTS: int = min(max(_int_env("ERP_SETTLEMENT_ATTEMPTS", 3), 1), 3)

    CURRENCY: str = os.getenv("ERP_CURRENCY", "USD")

    # Logging settings
    LOG_LEVEL: str = os.getenv("ERP_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR


settings = Settings()
