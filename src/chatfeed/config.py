"""Load chatfeed settings from the environment (and a .env file if present)."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Config:
    log_level: str = "INFO"
    http_timeout: float = 30.0
    poll_interval: float = 5.0


def _parse_positive(name, default):
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def load_config():
    """
    Load configuration from environment variables.

    Returns:
        Config with defaults for anything unset

    Raises:
        ValueError if a value cannot be parsed
    """
    load_dotenv()

    log_level = os.environ.get("CHATFEED_LOG_LEVEL", "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(
            f"CHATFEED_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}"
        )

    return Config(
        log_level=log_level,
        http_timeout=_parse_positive("CHATFEED_HTTP_TIMEOUT", 30.0),
        poll_interval=_parse_positive("CHATFEED_POLL_INTERVAL", 5.0),
    )
