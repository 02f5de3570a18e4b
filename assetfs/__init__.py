"""assetfs: Read-only asset lookup over a physical directory and a bundled archive."""

from .archive import ArchiveError, iter_tar_entries, load_archive
from .base import AssetFile, AssetSource
from .config import (
    PHYSICAL_ACCESS_AVAILABLE,
    CacheConfig,
    FSConfig,
    NoCache,
    TarCache,
    configure_fs,
)
from .context import AssetContext
from .filesystem import AssetFS

__all__ = [
    "ArchiveError",
    "AssetContext",
    "AssetFile",
    "AssetFS",
    "AssetSource",
    "CacheConfig",
    "configure_fs",
    "FSConfig",
    "iter_tar_entries",
    "load_archive",
    "NoCache",
    "PHYSICAL_ACCESS_AVAILABLE",
    "TarCache",
]
