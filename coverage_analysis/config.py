"""
config.py

Runtime configuration for the coverage analysis package, read from the
environment. Values are looked up when used, so importing the package never
reads a .env file; applications call load_settings() to opt into one.

Environment Variables:
----------------------
- COVERAGE_GOOD_THRESHOLD: Percentage at or above which coverage is reported as "success" (default: 80).
- COVERAGE_WARN_THRESHOLD: Percentage at or above which coverage is reported as "warning" (default: 50).
- COVERAGE_LOG_LEVEL: Log level used by configure_logging() (default: "INFO").
- COVERAGE_DEBUG: When truthy, forces DEBUG logging (default: false).
"""

import os
import logging
from typing import Any, Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

DEFAULT_GOOD_COVERAGE_THRESHOLD = 80
DEFAULT_WARN_COVERAGE_THRESHOLD = 50


def _env_int(name: str, default: int) -> int:
    """
    Reads an integer from the environment, falling back to the default when the
    variable is unset or cannot be parsed.
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid integer for {name}: {raw!r}, using {default}")
        return default


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def good_coverage_threshold() -> int:
    return _env_int("COVERAGE_GOOD_THRESHOLD", DEFAULT_GOOD_COVERAGE_THRESHOLD)


def warn_coverage_threshold() -> int:
    return _env_int("COVERAGE_WARN_THRESHOLD", DEFAULT_WARN_COVERAGE_THRESHOLD)


def log_level() -> str:
    if _env_flag("COVERAGE_DEBUG"):
        return "DEBUG"
    return os.getenv("COVERAGE_LOG_LEVEL", "INFO").upper()


def load_settings(dotenv_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Loads a .env file into the environment and returns the resulting settings.

    Existing environment variables win over values from the file.

    Args:
        dotenv_path (Optional[str]): Path of the .env file. When omitted,
            python-dotenv searches for one.

    Returns:
        dict: {"good_threshold", "warn_threshold", "log_level"}
    """
    load_dotenv(dotenv_path=dotenv_path)
    return {
        "good_threshold": good_coverage_threshold(),
        "warn_threshold": warn_coverage_threshold(),
        "log_level": log_level(),
    }


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configures root logging for scripts and notebooks using this package.

    The library itself never calls this on import; applications opt in.

    Args:
        level (Optional[str]): Log level name. Defaults to log_level().
    """
    chosen = (level or log_level()).upper()
    numeric = getattr(logging, chosen, None)
    if not isinstance(numeric, int):
        logger.warning(f"Unknown log level {chosen!r}, using INFO")
        numeric = logging.INFO
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
