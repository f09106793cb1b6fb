"""Application configuration helpers."""

from __future__ import annotations

from .branch import BranchSettings, get_branch_settings, resolve_branch
from .env import env_flag, optional_env_var
from .errors import BranchConfigurationError, ConfigurationError, MissingConfigurationError
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "BranchConfigurationError",
    "BranchSettings",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "StorageConfig",
    "configure_logging",
    "env_flag",
    "get_branch_settings",
    "get_database_config",
    "get_storage_config",
    "optional_env_var",
    "resolve_branch",
]
