"""Profiles service."""

import logging
from typing import Any, Dict, List, Optional, Union

from .common import PROFILES_API_PATH, profile_path
from .models import Profile, ProfileSummary, to_payload
from .services import Service, unwrap

logger = logging.getLogger(__name__)


class ProfilesService(Service):
    """Create, inspect and remove NextDNS profiles."""

    def list(self) -> List[ProfileSummary]:
        """
        List the profiles available to the API key.

        Returns:
            Profile summaries (id, fingerprint, name)
        """
        data = self._fetch(PROFILES_API_PATH)
        return ProfileSummary.from_list(data if isinstance(data, list) else None)

    def create(self, profile: Union[Profile, Dict[str, Any], None] = None) -> Optional[str]:
        """
        Create a profile.

        Args:
            profile: Optional initial configuration (name, lists, settings...)

        Returns:
            ID of the new profile
        """
        payload = to_payload(profile) if profile is not None else None
        data = unwrap(self.client.request("POST", PROFILES_API_PATH, payload=payload))
        profile_id = data.get("id") if isinstance(data, dict) else None
        logger.info(f"Created profile {profile_id}")
        return profile_id

    def get(self, profile_id: str) -> Optional[Profile]:
        """Fetch the full configuration of a profile."""
        data = self._fetch(profile_path(profile_id))
        if data is None:
            return None
        return Profile.from_dict(data)

    def update(self, profile_id: str, changes: Union[Profile, Dict[str, Any]]) -> None:
        """Apply a partial update to a profile (e.g. rename it)."""
        self.client.request("PATCH", profile_path(profile_id), payload=to_payload(changes))
        logger.info(f"Updated profile {profile_id}")

    def delete(self, profile_id: str) -> None:
        """Delete a profile."""
        self.client.request("DELETE", profile_path(profile_id))
        logger.info(f"Deleted profile {profile_id}")
