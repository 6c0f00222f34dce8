"""Profile settings services."""

from .models import Settings, SettingsBlockPage, SettingsLogs, SettingsPerformance
from .services import SettingsResource


class SettingsService(SettingsResource[Settings]):
    path = "settings"
    model = Settings
    label = "settings"


class SettingsLogsService(SettingsResource[SettingsLogs]):
    path = "settings/logs"
    model = SettingsLogs
    label = "logs settings"


class SettingsBlockPageService(SettingsResource[SettingsBlockPage]):
    path = "settings/blockPage"
    model = SettingsBlockPage
    label = "block page settings"


class SettingsPerformanceService(SettingsResource[SettingsPerformance]):
    path = "settings/performance"
    model = SettingsPerformance
    label = "performance settings"
