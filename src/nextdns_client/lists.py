"""Allowlist and denylist services."""

from .models import ListEntry
from .services import EditableArrayResource


class AllowlistService(EditableArrayResource[ListEntry]):
    """Domains always resolved for a profile (``profiles/<id>/allowlist``)."""

    path = "allowlist"
    model = ListEntry
    label = "allowlist"


class DenylistService(EditableArrayResource[ListEntry]):
    """Domains always blocked for a profile (``profiles/<id>/denylist``)."""

    path = "denylist"
    model = ListEntry
    label = "denylist"
