"""Configuration for asset filesystem construction.

Provides configuration dataclasses and the configure_fs factory function
for describing where assets come from (a physical directory, a bundled
archive, or both).
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

# Platforms without a usable host filesystem resolve from the cache only.
RESTRICTED_PLATFORMS = frozenset({"emscripten", "wasi"})

PHYSICAL_ACCESS_AVAILABLE = sys.platform not in RESTRICTED_PLATFORMS


@dataclass
class NoCache:
    """No embedded cache; only the physical root is consulted.

    Attributes:
        type: Always "none".
    """

    type: Literal["none"] = "none"


@dataclass
class TarCache:
    """Embedded cache backed by a tar archive held in memory.

    Attributes:
        type: Always "tar".
        data: Raw archive bytes (plain or compressed tar).
    """

    type: Literal["tar"] = "tar"
    data: bytes = field(default=b"", repr=False)

    @classmethod
    def from_path(cls, path: str | Path) -> "TarCache":
        """Read an archive from disk into a cache configuration."""
        return cls(data=Path(path).read_bytes())


# Type alias for all cache sources
CacheConfig = NoCache | TarCache


@dataclass
class FSConfig:
    """Configuration for an asset filesystem.

    Attributes:
        physical_root_dir: Directory consulted before the cache. Used
            verbatim: it is not checked for existence or normalized.
        cache: Where the embedded cache comes from.
        physical_access: Whether the host filesystem may be read at all.
            When False, lookups resolve from the cache only.
    """

    physical_root_dir: str | Path | None = None
    cache: CacheConfig = field(default_factory=NoCache)
    physical_access: bool = PHYSICAL_ACCESS_AVAILABLE


def configure_fs(
    physical_root_dir: str | Path | None = None,
    cache: CacheConfig | bytes | None = None,
    **kwargs,
) -> FSConfig:
    """Configure asset filesystem construction.

    Args:
        physical_root_dir: Optional override directory.
        cache: The embedded cache source.
            - None: no cache.
            - bytes: raw tar archive, wrapped in a TarCache.
            - NoCache / TarCache: used as given.
        **kwargs: Additional configuration.
            - physical_access (bool): Optional. Allow host filesystem reads
              (default: PHYSICAL_ACCESS_AVAILABLE).

    Returns:
        FSConfig for AssetFS.from_config().

    Raises:
        ValueError: On unexpected keyword arguments.
        TypeError: If ``cache`` is of an unsupported type.

    Examples:
        Physical directory only:
        >>> configure_fs(physical_root_dir="/srv/assets", physical_access=True)
        FSConfig(physical_root_dir='/srv/assets', cache=NoCache(type='none'), physical_access=True)

        Archive-backed cache:
        >>> configure_fs(cache=b"...").cache
        TarCache(type='tar')
    """
    physical_access = kwargs.pop("physical_access", PHYSICAL_ACCESS_AVAILABLE)
    if kwargs:
        raise ValueError(
            f"Unexpected arguments for asset fs: {list(kwargs.keys())}"
        )

    if cache is None:
        cache = NoCache()
    elif isinstance(cache, (bytes, bytearray, memoryview)):
        cache = TarCache(data=bytes(cache))
    elif not isinstance(cache, (NoCache, TarCache)):
        raise TypeError(
            f"Unsupported cache type: {type(cache).__name__}. "
            "Use bytes, NoCache or TarCache."
        )

    return FSConfig(
        physical_root_dir=physical_root_dir,
        cache=cache,
        physical_access=bool(physical_access),
    )
