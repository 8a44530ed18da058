from prflow.config.settings import (
    GitHubSettings,
    JiraSettings,
    LoggingSettings,
    Settings,
    load_settings,
)

__all__ = [
    'Settings',
    'GitHubSettings',
    'JiraSettings',
    'LoggingSettings',
    'load_settings',
]
