"""Configuration loading and validation for the NextDNS client."""

import logging
import os
import re
from pathlib import Path
from typing import Any, Optional

from platformdirs import user_config_dir

from .common import (
    APP_NAME,
    parse_bool,
    parse_env_value,
    safe_int,
    validate_url,
)
from .exceptions import ConfigurationError

# =============================================================================
# CREDENTIAL VALIDATION PATTERNS
# =============================================================================

# NextDNS API key pattern: alphanumeric with optional underscores/hyphens
# Minimum 8 characters for flexibility with test keys
API_KEY_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{8,}$")

# NextDNS Profile ID pattern: alphanumeric, typically 6 characters like "abc123"
PROFILE_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{4,30}$")


def validate_api_key(api_key: str) -> bool:
    """
    Validate NextDNS API key format.

    Args:
        api_key: API key string to validate

    Returns:
        True if valid format, False otherwise
    """
    if not api_key or not isinstance(api_key, str):
        return False
    return API_KEY_PATTERN.match(api_key.strip()) is not None


def validate_profile_id(profile_id: str) -> bool:
    """
    Validate NextDNS Profile ID format.

    Args:
        profile_id: Profile ID string to validate

    Returns:
        True if valid format, False otherwise
    """
    if not profile_id or not isinstance(profile_id, str):
        return False
    return PROFILE_ID_PATTERN.match(profile_id.strip()) is not None


# =============================================================================
# CONSTANTS
# =============================================================================

API_URL = "https://api.nextdns.io/"
DEFAULT_TIMEOUT = 10

logger = logging.getLogger(__name__)


# =============================================================================
# XDG DIRECTORY FUNCTIONS
# =============================================================================


def get_config_dir(override: Optional[Path] = None) -> Path:
    """
    Get the configuration directory path.

    Resolution order:
    1. Override path if provided
    2. Current working directory if it holds a .env file
    3. XDG config directory (~/.config/nextdns-client on Linux,
       ~/Library/Application Support/nextdns-client on macOS)

    Args:
        override: Optional path to use instead of auto-detection

    Returns:
        Path to the configuration directory
    """
    if override:
        return Path(override)

    cwd = Path.cwd()
    if (cwd / ".env").exists():
        return cwd

    return Path(user_config_dir(APP_NAME))


# =============================================================================
# CONFIGURATION LOADING
# =============================================================================


def load_env_file(env_file: Path) -> int:
    """
    Export KEY=VALUE lines of a .env file into os.environ.

    Args:
        env_file: Path to the .env file

    Returns:
        Number of variables exported
    """
    exported = 0
    with open(env_file, encoding="utf-8-sig") as f:  # utf-8-sig handles BOM
        for line_num, line in enumerate(f, 1):
            line = line.strip()

            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                logger.warning(f".env line {line_num}: missing '=' separator, skipping")
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            if key.startswith("export "):
                key = key[len("export "):].strip()

            if not key:
                logger.warning(f".env line {line_num}: empty key, skipping")
                continue

            os.environ[key] = parse_env_value(value)
            exported += 1

    return exported


def load_config(config_dir: Optional[Path] = None) -> dict[str, Any]:
    """
    Load configuration from .env file and environment variables.

    Args:
        config_dir: Optional directory containing the .env file.
                   If None, it is resolved with get_config_dir().

    Returns:
        Configuration dictionary with all settings

    Raises:
        ConfigurationError: If required configuration is missing or invalid
    """
    config_dir = get_config_dir(config_dir)
    env_file = config_dir / ".env"

    if env_file.exists():
        count = load_env_file(env_file)
        logger.debug(f"Loaded {count} variable(s) from {env_file}")

    config: dict[str, Any] = {
        "api_key": os.getenv("NEXTDNS_API_KEY"),
        "profile_id": os.getenv("NEXTDNS_PROFILE_ID") or None,
        "base_url": os.getenv("NEXTDNS_API_URL") or API_URL,
        "timeout": safe_int(os.getenv("API_TIMEOUT"), DEFAULT_TIMEOUT, "API_TIMEOUT"),
        "debug": parse_bool(os.getenv("NEXTDNS_DEBUG")),
        "config_dir": str(config_dir),
    }

    if not config["api_key"]:
        raise ConfigurationError("Missing NEXTDNS_API_KEY in .env or environment")

    if not validate_api_key(config["api_key"]):
        raise ConfigurationError(
            "Invalid NEXTDNS_API_KEY format. "
            "API key should be alphanumeric (with optional - or _) and at least 8 characters."
        )

    if config["profile_id"] and not validate_profile_id(config["profile_id"]):
        raise ConfigurationError(
            "Invalid NEXTDNS_PROFILE_ID format. "
            "Profile ID should be alphanumeric (4-30 characters)."
        )

    if not validate_url(config["base_url"]):
        raise ConfigurationError(
            f"Invalid NEXTDNS_API_URL '{config['base_url']}'. "
            f"Must be a valid http:// or https:// URL"
        )

    if config["timeout"] == 0:
        raise ConfigurationError("API_TIMEOUT must be greater than zero")

    return config
