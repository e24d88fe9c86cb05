"""Entry and asset folder configuration."""

from __future__ import annotations

from .errors import FolderConfigError
from .i18n import RawI18nConfig, overlay_i18n, resolve_i18n_config
from .loader import load_folder_configs, parse_folder_configs
from .models import (
    DEFAULT_LOCALE,
    AssetFolderConfig,
    EntryFolderConfig,
    FolderConfigs,
    I18nConfig,
)

__all__ = [
    "DEFAULT_LOCALE",
    "AssetFolderConfig",
    "EntryFolderConfig",
    "FolderConfigError",
    "FolderConfigs",
    "I18nConfig",
    "RawI18nConfig",
    "load_folder_configs",
    "overlay_i18n",
    "parse_folder_configs",
    "resolve_i18n_config",
]
