"""
Configuration read from environment variables.
"""

import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def get_int_env(name: str, default: int) -> int:
    """Integer environment variable; malformed values fall back to `default`"""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} is not an integer, using {default}")
        return default


DB_PATH = os.getenv("PLATE_DB_PATH", "plates.sqlite")

DEFAULT_LIMIT = get_int_env("PLATE_SEARCH_DEFAULT_LIMIT", 20)
MAX_LIMIT = 10000

# fetch_containing() is only an optimization; "false" forces fetch_all()
PREFILTER_ENABLED = os.getenv("PLATE_SEARCH_PREFILTER", "true").strip().lower() not in {"0", "false", "no", "off"}

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def get_log_file() -> Optional[Path]:
    """PLATE_SEARCH_LOG_FILE, if set"""
    log_file = os.getenv("PLATE_SEARCH_LOG_FILE", "").strip()
    return Path(log_file) if log_file else None
