"""NextDNS Client - Typed client for the NextDNS management API."""

__version__ = "1.0.0"

from .analytics import AnalyticsQuery, DestinationType, UNIDENTIFIED_DEVICE
from .client import NextDNSClient, API_URL
from .config import load_config
from .exceptions import (
    NextDNSError,
    ConfigurationError,
    MissingProfileError,
    TransportError,
    APIError,
    ServiceError,
    RequestError,
    MalformedResponseError,
    AuthenticationError,
    NotFoundError,
    ErrorType,
    ErrorDetail,
)
from .models import (
    ListEntry,
    ParentalControl,
    Privacy,
    PrivacyBlocklist,
    PrivacyNative,
    Profile,
    ProfileSummary,
    Rewrite,
    Security,
    SecurityTld,
    Settings,
    SettingsBlockPage,
    SettingsLogs,
    SettingsLogsDrop,
    SettingsPerformance,
    Setup,
    SetupLinkedIP,
)

__all__ = [
    "__version__",
    "NextDNSClient",
    "API_URL",
    "load_config",
    "AnalyticsQuery",
    "DestinationType",
    "UNIDENTIFIED_DEVICE",
    "NextDNSError",
    "ConfigurationError",
    "MissingProfileError",
    "TransportError",
    "APIError",
    "ServiceError",
    "RequestError",
    "MalformedResponseError",
    "AuthenticationError",
    "NotFoundError",
    "ErrorType",
    "ErrorDetail",
    "ListEntry",
    "ParentalControl",
    "Privacy",
    "PrivacyBlocklist",
    "PrivacyNative",
    "Profile",
    "ProfileSummary",
    "Rewrite",
    "Security",
    "SecurityTld",
    "Settings",
    "SettingsBlockPage",
    "SettingsLogs",
    "SettingsLogsDrop",
    "SettingsPerformance",
    "Setup",
    "SetupLinkedIP",
]
