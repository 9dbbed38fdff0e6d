from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict


class FileRotationSettings(BaseModel):
    """
    Date-based rotation settings (daily).

    This maps cleanly to Python's standard library TimedRotatingFileHandler behavior.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    backup_count: int = 7


class FileLoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = ""
    rotation: FileRotationSettings = FileRotationSettings()


class LoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    level: str = "INFO"
    file: FileLoggingSettings = FileLoggingSettings()
    loggers: Dict[str, str] = {}


class StorageSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    # Metadata documents and saved accounts live in separate store points.
    metadata_dir: str = "data/metadata"
    accounts_dir: str = "data/accounts"


class HttpSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    timeout_seconds: float = 30.0
    user_agent: str = "launcher-core"


class AuthSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    # Azure application (client) id registered for the device code flow.
    client_id: str
    device_code_poll_limit_seconds: float = 900.0


class MetadataSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    endpoint: str = "https://meta.prismlauncher.org/v1"


class AppConfig(BaseModel):
    """Effective runtime configuration after applying all precedence rules."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    logging: LoggingSettings = LoggingSettings()
    storage: StorageSettings = StorageSettings()
    http: HttpSettings = HttpSettings()
    auth: AuthSettings
    metadata: MetadataSettings = MetadataSettings()


@dataclass(frozen=True, slots=True)
class ConfigLoadRequest:
    """Where a configuration loader reads from."""

    yaml_path: str = "data/config/config.yaml"
    env_prefix: str = "LAUNCHER__"
    dotenv_path: Optional[str] = "data/.env"
    # Copied to yaml_path on first run when that file is missing.
    example_path: str = "examples/config.yaml"
