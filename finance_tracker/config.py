"""Configuration management for the finance tracker.

This module centralizes all configuration values including simulated
latencies, display defaults, seed selection and environment variable
overrides.  Nothing here touches the filesystem except for resolving
the bundled seed file path.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

# Package root - assumes this file is in finance_tracker/
_PACKAGE_ROOT = Path(__file__).parent.resolve()

DATA_DIR = _PACKAGE_ROOT / "data"
DEFAULT_SEED_PATH = DATA_DIR / "demo_seed.json"

# Simulated round-trip latencies (seconds) for store operations
ADD_LATENCY = 0.5
UPDATE_LATENCY = 0.5
DELETE_LATENCY = 0.3

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def get_latency_scale() -> float:
    """Multiplier applied to every simulated latency (0 disables delays)."""
    return _float_env("FINTRACK_LATENCY_SCALE", 1.0)


def get_currency_symbol() -> str:
    """Currency symbol used by every view."""
    return os.getenv("FINTRACK_CURRENCY_SYMBOL", "$")


def get_top_category_count() -> int:
    """How many categories the dashboard lists under 'Top Categories'."""
    return _int_env("FINTRACK_TOP_CATEGORIES", 5)


def get_seed_mode() -> str:
    """Either ``demo`` (bundled sample data) or ``empty``."""
    mode = os.getenv("FINTRACK_SEED", "demo").strip().lower()
    return mode if mode in {"demo", "empty"} else "demo"


def get_seed_path() -> Path:
    """Location of the seed file read once at session start."""
    return Path(os.getenv("FINTRACK_SEED_PATH", DEFAULT_SEED_PATH)).resolve()


def get_log_level() -> int:
    level_name = os.getenv("FINTRACK_LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def configure_logging() -> None:
    """Configure root logging once for the Streamlit process."""
    logging.basicConfig(format=LOG_FORMAT, level=get_log_level())
