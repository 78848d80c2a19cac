"""
Centralized configuration with environment variable overrides.

Endpoint location, transport limits and display preferences are all
configurable here. Nothing is hardcoded in the gateway or screen logic.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from customer_counts.logging_context import ViewIdFilter

load_dotenv()

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s [%(view_id)s]: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


def _safe_bool(env_var: str, default: str) -> bool:
    """Parse a boolean flag from an env var (1/0, true/false, yes/no, on/off)."""
    raw = os.getenv(env_var, default)
    normalized = str(raw).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for {env_var}: {raw!r}")


@dataclass(frozen=True)
class ApiConfig:
    """Remote customer service location and transport settings."""

    base_url: str = os.getenv("API_BASE_URL", "http://localhost:8000/api")
    timeout_seconds: float = _safe_float("HTTP_TIMEOUT_SECONDS", "30")
    verify_tls: bool = _safe_bool("HTTP_VERIFY_TLS", "true")


@dataclass(frozen=True)
class DisplayConfig:
    """How the drill-down list is presented to the UI layer."""

    newest_first: bool = _safe_bool("LIST_NEWEST_FIRST", "true")
    reminder_display_format: str = os.getenv(
        "REMINDER_DISPLAY_FORMAT", "%m/%d/%Y, %I:%M %p"
    )


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    api: ApiConfig = field(default_factory=ApiConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "customer-count-display")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if not config.api.base_url.startswith(("http://", "https://")):
        raise ValueError(
            f"API_BASE_URL must start with http:// or https://, got {config.api.base_url!r}"
        )
    if config.api.timeout_seconds <= 0:
        raise ValueError(
            f"HTTP_TIMEOUT_SECONDS must be > 0, got {config.api.timeout_seconds}"
        )
    if "%" not in config.display.reminder_display_format:
        raise ValueError(
            "REMINDER_DISPLAY_FORMAT must contain strftime directives, "
            f"got {config.display.reminder_display_format!r}"
        )


def _log_handler() -> logging.Handler:
    """Console handler that tags every line with the current view session."""
    handler = logging.StreamHandler()
    handler.addFilter(ViewIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    return handler


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        handlers=[_log_handler()],
    )
    logger.info("Configuration loaded for '%s' (%s)", config.app_name, config.api.base_url)
    return config


# Singleton instance
settings = load_config()
