"""Parental control services."""

from .models import ListEntry, ParentalControl
from .services import EditableArrayResource, SettingsResource


class ParentalControlService(SettingsResource[ParentalControl]):
    path = "parentalControl"
    model = ParentalControl
    label = "parental control"


class ParentalControlServicesService(EditableArrayResource[ListEntry]):
    """Blocked apps and websites (e.g. ``tiktok``, ``fortnite``)."""

    path = "parentalControl/services"
    model = ListEntry
    label = "parental control services"


class ParentalControlCategoriesService(EditableArrayResource[ListEntry]):
    """Blocked categories (e.g. ``gambling``, ``social-networks``)."""

    path = "parentalControl/categories"
    model = ListEntry
    label = "parental control categories"
