"""On-disk locations used by revsync.

Only the persistent HTTP cache lives on disk; the knowledge graph is the store
of record. ``REVSYNC_DATA_DIR`` overrides the platform cache directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "revsync"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    http_cache_filename: str = HTTP_CACHE_FILENAME

    def http_cache_path(self, *, create_dir: bool = True) -> Path:
        directory = self.data_dir.expanduser().resolve()
        if create_dir:
            directory.mkdir(parents=True, exist_ok=True)
        return directory / self.http_cache_filename


def _platform_cache_dir() -> Path:
    if os.name == "nt":
        local = os.getenv("LOCALAPPDATA")
        return Path(local) if local else Path.home() / "AppData" / "Local"
    xdg = os.getenv("XDG_CACHE_HOME")
    return Path(xdg) if xdg else Path.home() / ".cache"


def get_storage_config() -> StorageConfig:
    override = os.getenv("REVSYNC_DATA_DIR")
    data_dir = Path(override) if override else _platform_cache_dir() / APP_DIR_NAME
    return StorageConfig(data_dir=data_dir)


def get_http_cache_path() -> Path:
    return get_storage_config().http_cache_path()
