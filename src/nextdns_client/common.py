"""Common utilities shared between NextDNS client modules."""

import re
from datetime import datetime
from typing import Any, Mapping, Optional
from urllib.parse import quote, urlencode

from .exceptions import ConfigurationError, MissingProfileError


# =============================================================================
# SHARED CONSTANTS
# =============================================================================

APP_NAME = "nextdns-client"

PROFILES_API_PATH = "profiles"

# Domain validation constants (RFC 1035)
MAX_DOMAIN_LENGTH = 253
MAX_LABEL_LENGTH = 63

# Domain validation pattern (RFC 1035 compliant, no trailing dot)
DOMAIN_PATTERN = re.compile(
    r'^(?:[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?\.)*'
    r'[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?$'
)

# URL pattern for NEXTDNS_API_URL validation (hostnames, localhost and IPs)
URL_PATTERN = re.compile(
    r'^https?://'
    r'(?:localhost|[a-zA-Z0-9.-]+)'
    r'(?::\d{1,5})?'
    r'(?:/[^\s]*)?$',
    re.IGNORECASE
)

_CAMEL_BOUNDARY = re.compile(r'_([a-z0-9])')


# =============================================================================
# VALIDATION FUNCTIONS
# =============================================================================

def validate_domain(domain: str) -> bool:
    """
    Validate a domain name according to RFC 1035.

    Wildcard entries such as ``*.example.com`` are accepted since the
    allow and deny lists support them.

    Args:
        domain: Domain name to validate

    Returns:
        True if valid, False otherwise
    """
    if not domain or len(domain) > MAX_DOMAIN_LENGTH:
        return False
    # Reject trailing dots (FQDN notation not supported)
    if domain.endswith('.'):
        return False
    if domain.startswith('*.'):
        domain = domain[2:]
    return DOMAIN_PATTERN.match(domain) is not None


def validate_url(url: str) -> bool:
    """Validate a URL string (must be http or https)."""
    if not url or not isinstance(url, str):
        return False
    return URL_PATTERN.match(url) is not None


# =============================================================================
# PATH AND QUERY CONSTRUCTION
# =============================================================================

def quote_segment(value: Any) -> str:
    """Percent-encode a single path segment taken from caller input."""
    return quote(str(value), safe="")


def profile_path(profile_id: Optional[str], *parts: str) -> str:
    """
    Build the path of a profile or one of its sub-resources.

    Args:
        profile_id: NextDNS profile ID
        parts: Static sub-resource path parts (e.g. ``"privacy/natives"``)

    Returns:
        Relative API path such as ``profiles/abc123/privacy/natives``

    Raises:
        MissingProfileError: If profile_id is empty
    """
    if not profile_id:
        raise MissingProfileError()
    segments = [PROFILES_API_PATH, quote_segment(profile_id)]
    segments.extend(p.strip("/") for p in parts if p)
    return "/".join(segments)


def to_camel(name: str) -> str:
    """Convert a snake_case attribute name to the API's camelCase key."""
    return _CAMEL_BOUNDARY.sub(lambda m: m.group(1).upper(), name)


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def encode_query(query: Any) -> str:
    """
    Encode query parameters, skipping entries whose value is None.

    Keys are sent under the API's camelCase names, so ``{"query_type": 1}``
    and ``{"queryType": 1}`` encode the same way.

    Args:
        query: Mapping of parameters, or a model exposing ``to_dict()``

    Returns:
        Encoded query string without the leading ``?``
    """
    if query is None:
        return ""
    if not isinstance(query, Mapping):
        query = query.to_dict()
    pairs = [
        (to_camel(key), _query_value(value))
        for key, value in query.items()
        if value is not None
    ]
    return urlencode(pairs)


def build_uri(path: str, query: Any = None) -> str:
    """Append the encoded query to path, if anything remains to encode."""
    encoded = encode_query(query)
    if not encoded:
        return path
    return f"{path}?{encoded}"


# =============================================================================
# PARSING FUNCTIONS
# =============================================================================

def parse_env_value(value: str) -> str:
    """
    Parse .env value, handling quotes and whitespace.

    Args:
        value: Raw value from .env file

    Returns:
        Cleaned value with quotes removed
    """
    value = value.strip()
    if len(value) >= 2:
        if (value.startswith('"') and value.endswith('"')) or \
           (value.startswith("'") and value.endswith("'")):
            value = value[1:-1]
    return value


def parse_bool(value: Optional[str], default: bool = False) -> bool:
    """Interpret common truthy strings ("1", "true", "yes", "on")."""
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def safe_int(value: Optional[str], default: int, name: str = "value") -> int:
    """
    Safely convert a string to int with validation.

    Args:
        value: String value to convert (can be None)
        default: Default value if value is None
        name: Name of the value for error messages

    Returns:
        Converted integer or default value

    Raises:
        ConfigurationError: If value is not a valid positive integer
    """
    if value is None:
        return default

    try:
        result = int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a valid integer, got: {value}")
    if result < 0:
        raise ConfigurationError(f"{name} must be a positive integer, got: {value}")
    return result
