"""Application context carrying the asset filesystem.

The filesystem is passed explicitly through the context object the
application threads through its call graph; there is no module-level
instance.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .base import AssetFile
from .config import FSConfig
from .filesystem import AssetFS


@dataclass
class AssetContext:
    """Holds the filesystem for the lifetime of the application.

    Attributes:
        filesystem: The asset filesystem used by ``open()``.
    """

    filesystem: AssetFS

    @classmethod
    def from_config(cls, config: FSConfig) -> "AssetContext":
        """Build the context, loading the archive cache once.

        Raises:
            ArchiveError: If the configured archive cannot be read.
        """
        return cls(filesystem=AssetFS.from_config(config))


def open(ctx: AssetContext, path: str | os.PathLike[str]) -> AssetFile:
    """Open an asset through the context's filesystem in read-only mode."""
    return ctx.filesystem.open(path)
