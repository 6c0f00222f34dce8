"""Setup (endpoints and linked IP) services."""

from typing import Optional

from .models import Setup, SetupLinkedIP
from .services import ProfileResource, SettingsResource


class SetupService(ProfileResource[Setup]):
    """Read-only view of the DNS endpoints assigned to a profile."""

    path = "setup"
    model = Setup
    label = "setup"

    def get(self, profile_id: str) -> Optional[Setup]:
        data = self._fetch(self._path(profile_id))
        if data is None:
            return None
        return Setup.from_dict(data)


class SetupLinkedIPService(SettingsResource[SetupLinkedIP]):
    path = "setup/linkedip"
    model = SetupLinkedIP
    label = "linked ip settings"
