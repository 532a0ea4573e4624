"""
Runtime Configuration

Reads storefront settings from environment variables.

Includes:
- Database URL and SQL echo flag
- Logging level and log directory
"""
import os
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DATA_DIR = Path.home() / ".storefront"


def _env_flag(name: str, default: str = 'false') -> bool:
    """
    Parse a boolean environment variable.

    Returns:
        True if the variable is set to 'true', '1' or 'yes' (case-insensitive)
    """
    return os.environ.get(name, default).lower() in ('true', '1', 'yes')


def get_database_url() -> str:
    """
    Resolve the database URL.

    Uses STOREFRONT_DATABASE_URL when set, otherwise a SQLite file in the
    storefront data directory (created on demand).
    """
    url = os.environ.get('STOREFRONT_DATABASE_URL')
    if url:
        return url

    DATA_DIR.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{DATA_DIR / 'storefront.db'}"


def get_log_dir() -> Path:
    """Directory for rotating log files (STOREFRONT_LOG_DIR)."""
    return Path(os.environ.get('STOREFRONT_LOG_DIR', str(DATA_DIR / 'logs')))


def get_log_level() -> int:
    """
    Resolve the root log level from STOREFRONT_LOG_LEVEL.

    Unknown level names fall back to INFO.
    """
    name = os.environ.get('STOREFRONT_LOG_LEVEL', 'INFO').upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        logger.warning(f"Unknown log level '{name}', using INFO")
        return logging.INFO
    return level


DATABASE_URL = get_database_url()
SQL_ECHO = _env_flag('STOREFRONT_SQL_ECHO')
