"""Base classes shared by the per-resource services."""

import logging
from typing import TYPE_CHECKING, Any, Dict, Generic, Iterable, List, Optional, Type, TypeVar, Union

from .common import profile_path, quote_segment
from .models import Model, to_payload

if TYPE_CHECKING:
    from .client import NextDNSClient

M = TypeVar("M", bound=Model)

logger = logging.getLogger(__name__)


def unwrap(result: Any) -> Any:
    """Return the ``data`` member of a decoded response envelope."""
    if isinstance(result, dict):
        return result.get("data")
    return None


class Service:
    """A resource service bound to a client."""

    def __init__(self, client: "NextDNSClient") -> None:
        self.client = client

    def _fetch(self, path: str, params: Any = None) -> Any:
        return unwrap(self.client.request("GET", path, params=params))


class ProfileResource(Service, Generic[M]):
    """
    Service for a resource nested under ``profiles/<id>/``.

    Subclasses set ``path`` (relative to the profile), ``model`` and a
    human readable ``label`` used in log messages.
    """

    path: str = ""
    model: Type[M]
    label: str = ""

    def _path(self, profile_id: Optional[str], *parts: str) -> str:
        return profile_path(profile_id, self.path, *parts)


class SettingsResource(ProfileResource[M]):
    """A single settings object supporting GET and PATCH."""

    def get(self, profile_id: str) -> Optional[M]:
        """Fetch the settings object of a profile."""
        data = self._fetch(self._path(profile_id))
        if data is None:
            return None
        return self.model.from_dict(data)

    def update(self, profile_id: str, changes: Union[M, Dict[str, Any]]) -> None:
        """
        Apply a partial update to the settings object.

        Args:
            profile_id: NextDNS profile ID
            changes: Model (None fields are left untouched) or raw dict
        """
        self.client.request("PATCH", self._path(profile_id), payload=to_payload(changes))
        logger.info(f"Updated {self.label} of profile {profile_id}")


class ArrayResource(ProfileResource[M]):
    """A list of entries that can be replaced, appended to and pruned."""

    def get(self, profile_id: str) -> List[M]:
        """Fetch every entry of the list."""
        data = self._fetch(self._path(profile_id))
        entries = self.model.from_list(data if isinstance(data, list) else None)
        logger.debug(f"Fetched {len(entries)} {self.label} entries for profile {profile_id}")
        return entries

    def create(self, profile_id: str, entries: Iterable[Union[M, Dict[str, Any]]]) -> None:
        """Replace the whole list with ``entries``."""
        items = list(entries)
        self.client.request("PUT", self._path(profile_id), payload=to_payload(items))
        logger.info(f"Replaced {self.label} of profile {profile_id} ({len(items)} entries)")

    def add(self, profile_id: str, entry: Union[M, Dict[str, Any]]) -> None:
        """Append a single entry to the list."""
        self.client.request("POST", self._path(profile_id), payload=to_payload(entry))
        logger.info(f"Added {self.label} entry to profile {profile_id}")

    def delete(self, profile_id: str, entry_id: str) -> None:
        """Remove the entry identified by ``entry_id``."""
        self.client.request("DELETE", self._entry_path(profile_id, entry_id))
        logger.info(f"Removed {self.label} entry {entry_id} from profile {profile_id}")

    def _entry_path(self, profile_id: str, entry_id: str) -> str:
        # Profile first: a missing profile outranks a missing entry
        base = self._path(profile_id)
        if not entry_id:
            raise ValueError(f"{self.label} entry id is required")
        return f"{base}/{quote_segment(entry_id)}"


class EditableArrayResource(ArrayResource[M]):
    """An ArrayResource whose entries can also be patched individually."""

    def update(self, profile_id: str, entry_id: str, changes: Union[M, Dict[str, Any]]) -> None:
        """Apply a partial update to one entry (e.g. toggle ``active``)."""
        self.client.request(
            "PATCH", self._entry_path(profile_id, entry_id), payload=to_payload(changes)
        )
        logger.info(f"Updated {self.label} entry {entry_id} of profile {profile_id}")
