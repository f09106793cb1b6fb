"""Location of the issue store."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

APP_DIR_NAME: Final[str] = "issueflow"
DEFAULT_DB_FILENAME: Final[str] = "issueflow.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Directory holding the local SQLite issue store."""

    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    @property
    def database_path(self) -> Path:
        return self.data_dir / self.database_filename

    def sqlite_uri(self, *, create_dir: bool = True) -> str:
        if create_dir:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        return f"sqlite+pysqlite:///{self.database_path}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def _platform_data_home() -> Path:
    if os.name == "nt":
        local_app_data = optional_env_var("LOCALAPPDATA")
        return Path(local_app_data) if local_app_data else Path.home() / "AppData" / "Local"
    xdg_data_home = optional_env_var("XDG_DATA_HOME")
    return Path(xdg_data_home) if xdg_data_home else Path.home() / ".local" / "share"


def get_storage_config() -> StorageConfig:
    """``ISSUEFLOW_DATA_DIR`` or ``<platform data home>/issueflow``."""

    explicit = optional_env_var("ISSUEFLOW_DATA_DIR")
    data_dir = Path(explicit) if explicit else _platform_data_home() / APP_DIR_NAME
    return StorageConfig(data_dir=data_dir.expanduser().resolve())


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """``DATABASE_URI`` when set, the SQLite file in the data directory otherwise."""

    explicit = optional_env_var("DATABASE_URI")
    if explicit:
        return DatabaseConfig(uri=explicit)
    return DatabaseConfig(uri=(storage or get_storage_config()).sqlite_uri())
