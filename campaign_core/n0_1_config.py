# 0- 1- config

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

# ===================================================
# DEFAULTS
# ===================================================
DEFAULT_DATA_URL = "http://localhost:3000/api/marketing-data"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# ===================================================
# ENV HELPERS
# ===================================================
def data_url() -> str:
    return os.getenv("MARKETING_DATA_URL", DEFAULT_DATA_URL)


def data_path() -> Optional[Path]:
    value = os.getenv("MARKETING_DATA_PATH")
    return Path(value) if value else None


def request_timeout() -> float:
    return float(os.getenv("MARKETING_REQUEST_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS)))


def device_seed() -> Optional[int]:
    value = os.getenv("SYNTHESIZE_DEVICE_SEED")
    return int(value) if value else None


# ===================================================
# LOGGING
# ===================================================
def configure_logging(level: Optional[str] = None) -> None:
    """
    Attach a single stream handler to the root logger.

    Safe to call on every Streamlit rerun: a second call only updates the level.
    """
    level = (level or os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)).upper()

    root = logging.getLogger()
    root.setLevel(level)

    if not any(getattr(h, "_campaign_core", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._campaign_core = True
        root.addHandler(handler)
