"""Asset filesystem with physical-root-then-cache lookup.

Resolves application asset paths (written ``/images/foo.png``) against an
optional override directory on disk, then against the files extracted from
the bundled archive at construction.
"""

from __future__ import annotations

import errno
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from .archive import load_archive
from .base import AssetFile
from .config import PHYSICAL_ACCESS_AVAILABLE, FSConfig, TarCache

logger = logging.getLogger(__name__)


class AssetFS:
    """Read-only virtual filesystem for application assets.

    Physical files always take precedence over cached ones. The cache is
    fixed at construction; physical reads are never cached.

    Example:
        >>> fs = AssetFS(files={"images/logo.png": b"\\x89PNG"})
        >>> fs.open("/images/logo.png").read()
        b'\\x89PNG'
    """

    SEP = "/"

    def __init__(
        self,
        physical_root_dir: str | os.PathLike[str] | None = None,
        files: Mapping[str, bytes] | None = None,
        physical_access: bool = PHYSICAL_ACCESS_AVAILABLE,
    ):
        """Initialize the filesystem.

        Args:
            physical_root_dir: Override directory, stored verbatim.
            files: Cache mapping of relative path to content.
            physical_access: Allow reads from the host filesystem.
        """
        self._root = physical_root_dir
        self._files: Mapping[str, bytes] = MappingProxyType(dict(files or {}))
        self._physical_access = physical_access

    @classmethod
    def from_config(cls, config: FSConfig) -> "AssetFS":
        """Build a filesystem from configuration.

        Loads the archive cache once. A missing root or a missing cache is
        fine; only a corrupt archive fails.

        Raises:
            ArchiveError: If the configured archive cannot be read.
        """
        data = config.cache.data if isinstance(config.cache, TarCache) else None
        return cls(
            physical_root_dir=config.physical_root_dir,
            files=load_archive(data),
            physical_access=config.physical_access,
        )

    @property
    def root(self) -> str | os.PathLike[str] | None:
        return self._root

    @property
    def physical_access(self) -> bool:
        return self._physical_access

    @property
    def cached_paths(self) -> tuple[str, ...]:
        """Sorted paths held in the embedded cache."""
        return tuple(sorted(self._files))

    def __len__(self) -> int:
        return len(self._files)

    def normalize(self, path: str | os.PathLike[str]) -> str:
        """Strip exactly one leading separator from an asset path.

        Inner separators are left as written, so ``/a//b`` looks up
        ``a//b`` and does not match a cache entry stored as ``a/b``.

        Examples:
            >>> AssetFS().normalize("/a/b")
            'a/b'
            >>> AssetFS().normalize("a/b")
            'a/b'
        """
        path = os.fspath(path)
        if path.startswith(self.SEP):
            return path[len(self.SEP):]
        return path

    def open(self, path: str | os.PathLike[str]) -> AssetFile:
        """Open an asset for reading.

        Args:
            path: Asset path, usually with a leading "/".

        Returns:
            A fresh AssetFile positioned at offset zero.

        Raises:
            FileNotFoundError: If neither the physical root nor the cache
                holds the path.
        """
        path = self.normalize(path)

        if self._physical_access and self._root is not None:
            content = self._read_physical(path)
            if content is not None:
                return AssetFile(content, path)

        if path not in self._files:
            raise FileNotFoundError(errno.ENOENT, "No such file", path)
        return AssetFile(self._files[path], path)

    def _read_physical(self, path: str) -> bytes | None:
        """Read ``root/path`` from disk, or None if it cannot be read.

        Every error is discarded, not only a missing file: the caller falls
        back to the cache.
        """
        real_path = Path(self._root) / path
        try:
            content = real_path.read_bytes()
        except (OSError, ValueError) as e:
            logger.debug("Physical read of %s failed, using cache: %s", real_path, e)
            return None
        logger.debug("Read %s from physical root", real_path)
        return content
