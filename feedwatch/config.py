"""
Runtime settings - environment based, loaded from .env when present.

Environment Variables:
    FEEDWATCH_BASE_URL: Listings site root (default: http://www.broadcastify.com)
    FEEDWATCH_HTTP_TIMEOUT: Per-request timeout in seconds (default: 30)
    FEEDWATCH_USER_AGENT: User-Agent header for page fetches
    FEEDWATCH_CONFIG_PATH: Operator YAML config (default: Config.yaml)
    FEEDWATCH_LOG_LEVEL: Logging level name (default: INFO)

These are process settings only. Alert thresholds and feed rules live in
the operator YAML file, see feedwatch.settings.
"""
import os
import logging

from dotenv import load_dotenv

from .constants import DEFAULT_BASE_URL

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "feedwatch/1.0 (listener monitor)"


def get_base_url() -> str:
    """Listings site root, without a trailing slash."""
    return os.getenv('FEEDWATCH_BASE_URL', DEFAULT_BASE_URL).rstrip('/')


def get_http_timeout() -> float:
    """
    Get the per-request timeout.

    Returns:
        Timeout in seconds (default: 30). Invalid or non-positive values
        fall back to the default.
    """
    raw = os.getenv('FEEDWATCH_HTTP_TIMEOUT', str(DEFAULT_HTTP_TIMEOUT))
    try:
        timeout = float(raw)
    except ValueError:
        logger.warning(f"Invalid FEEDWATCH_HTTP_TIMEOUT '{raw}', using {DEFAULT_HTTP_TIMEOUT}")
        return DEFAULT_HTTP_TIMEOUT

    if timeout <= 0:
        logger.warning(f"Non-positive FEEDWATCH_HTTP_TIMEOUT '{raw}', using {DEFAULT_HTTP_TIMEOUT}")
        return DEFAULT_HTTP_TIMEOUT
    return timeout


def get_user_agent() -> str:
    return os.getenv('FEEDWATCH_USER_AGENT', DEFAULT_USER_AGENT)


def get_config_path() -> str:
    return os.getenv('FEEDWATCH_CONFIG_PATH', 'Config.yaml')


def get_log_level() -> int:
    """Logging level from FEEDWATCH_LOG_LEVEL, INFO when unset or unknown."""
    name = os.getenv('FEEDWATCH_LOG_LEVEL', 'INFO').upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        return logging.INFO
    return level
