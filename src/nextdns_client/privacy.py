"""Privacy services."""

from .models import Privacy, PrivacyBlocklist, PrivacyNative
from .services import ArrayResource, SettingsResource


class PrivacyService(SettingsResource[Privacy]):
    path = "privacy"
    model = Privacy
    label = "privacy settings"


class PrivacyBlocklistsService(ArrayResource[PrivacyBlocklist]):
    path = "privacy/blocklists"
    model = PrivacyBlocklist
    label = "privacy blocklists"


class PrivacyNativesService(ArrayResource[PrivacyNative]):
    """Native tracking protection (e.g. ``apple``, ``windows``)."""

    path = "privacy/natives"
    model = PrivacyNative
    label = "privacy natives"
