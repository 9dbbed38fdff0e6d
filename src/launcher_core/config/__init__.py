from __future__ import annotations

from launcher_core.config.loader import YamlConfigLoader
from launcher_core.config.models import (
    AppConfig,
    AuthSettings,
    ConfigLoadRequest,
    HttpSettings,
    LoggingSettings,
    MetadataSettings,
    StorageSettings,
)

__all__ = [
    "AppConfig",
    "AuthSettings",
    "ConfigLoadRequest",
    "HttpSettings",
    "LoggingSettings",
    "MetadataSettings",
    "StorageSettings",
    "YamlConfigLoader",
]
