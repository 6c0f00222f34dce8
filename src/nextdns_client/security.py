"""Security services."""

from .models import Security, SecurityTld
from .services import ArrayResource, SettingsResource


class SecurityService(SettingsResource[Security]):
    path = "security"
    model = Security
    label = "security settings"


class SecurityTldsService(ArrayResource[SecurityTld]):
    """Top-level domains blocked for a profile."""

    path = "security/tlds"
    model = SecurityTld
    label = "security tlds"
