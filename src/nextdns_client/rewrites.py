"""DNS rewrites service."""

import logging
from typing import Any, Dict, List, Optional, Union

from .common import quote_segment
from .models import Rewrite, to_payload
from .services import ProfileResource, unwrap

logger = logging.getLogger(__name__)


class RewritesService(ProfileResource[Rewrite]):
    """Custom answers for a name (``profiles/<id>/rewrites``)."""

    path = "rewrites"
    model = Rewrite
    label = "rewrites"

    def list(self, profile_id: str) -> List[Rewrite]:
        """Fetch every rewrite of a profile."""
        data = self._fetch(self._path(profile_id))
        return Rewrite.from_list(data if isinstance(data, list) else None)

    def create(self, profile_id: str, rewrite: Union[Rewrite, Dict[str, Any]]) -> Optional[str]:
        """
        Create a rewrite.

        Args:
            profile_id: NextDNS profile ID
            rewrite: Rewrite with at least ``name`` and ``content``

        Returns:
            ID assigned to the new rewrite
        """
        result = self.client.request("POST", self._path(profile_id), payload=to_payload(rewrite))
        data = unwrap(result)
        rewrite_id = data.get("id") if isinstance(data, dict) else None
        logger.info(f"Created rewrite {rewrite_id} in profile {profile_id}")
        return rewrite_id

    def delete(self, profile_id: str, rewrite_id: str) -> None:
        """Delete the rewrite identified by ``rewrite_id``."""
        base = self._path(profile_id)
        if not rewrite_id:
            raise ValueError("rewrite id is required")
        self.client.request("DELETE", f"{base}/{quote_segment(rewrite_id)}")
        logger.info(f"Deleted rewrite {rewrite_id} from profile {profile_id}")
