"""Archive loader for the embedded asset cache.

Turns raw archive bytes into a mapping of relative path to file content.
Loading happens once, when the filesystem is built, and is all or nothing.
"""

from __future__ import annotations

import io
import logging
import tarfile
import zlib
from collections.abc import Callable, Iterable, Iterator

logger = logging.getLogger(__name__)

ArchiveReader = Callable[[bytes], Iterable[tuple[str, bytes]]]


class ArchiveError(Exception):
    """The bundled archive could not be read.

    A broken asset bundle is not a per-file condition: callers should
    treat this as an unrecoverable startup failure.
    """


def normalize_entry_path(name: str) -> str:
    """Turn an archive member name into a relative cache key.

    Only leading ``/`` and ``./`` prefixes are stripped; the rest of the
    name is kept as stored, backslashes and ``..`` included.

    Examples:
        >>> normalize_entry_path("./images/foo.png")
        'images/foo.png'
        >>> normalize_entry_path("/sounds/beep.wav")
        'sounds/beep.wav'
    """
    path = name
    while True:
        if path.startswith("/"):
            path = path[1:]
        elif path.startswith("./"):
            path = path[2:]
        else:
            break
    return "" if path == "." else path


def _check_end_of_archive(archive: tarfile.TarFile) -> None:
    """Raise unless iteration stopped at a real end of archive.

    ``tarfile`` ends iteration quietly on a corrupt or short header past
    the first member. The block where it stopped must be missing or all
    zeros.
    """
    archive.fileobj.seek(archive.offset)
    block = archive.fileobj.read(tarfile.BLOCKSIZE)
    if block and block.count(0) != len(block):
        raise tarfile.ReadError(
            f"invalid or truncated header at offset {archive.offset}"
        )


def iter_tar_entries(data: bytes) -> Iterator[tuple[str, bytes]]:
    """Yield ``(path, payload)`` for every tar member, in archive order.

    Compression (gzip, bz2, xz) is detected transparently. Members that
    are not regular files yield an empty payload.

    Raises:
        tarfile.TarError: On a malformed header or truncated data,
            including a bad header after valid members.
        OSError: On a failed payload read.
    """
    with tarfile.open(fileobj=io.BytesIO(data), mode="r:*") as archive:
        for member in archive:
            if not member.isfile():
                yield member.name, b""
                continue
            extracted = archive.extractfile(member)
            if extracted is None:
                yield member.name, b""
                continue
            with extracted:
                yield member.name, extracted.read()
        _check_end_of_archive(archive)


def load_archive(
    data: bytes | None,
    reader: ArchiveReader = iter_tar_entries,
) -> dict[str, bytes]:
    """Build the cache mapping from raw archive bytes.

    Args:
        data: Raw archive bytes, or None for no cache.
        reader: Callable producing ``(path, payload)`` pairs from the bytes.

    Returns:
        Mapping of relative path to non-empty content. Empty payloads are
        left out, and a later entry replaces an earlier one with the same
        path.

    Raises:
        ArchiveError: If iterating entries or reading any entry fails.
            No partial mapping is returned.
    """
    files: dict[str, bytes] = {}
    # Zero bytes hold no entries, same as an empty archive.
    if not data:
        return files

    skipped = 0
    try:
        for name, payload in reader(data):
            path = normalize_entry_path(name)
            if not payload or not path:
                skipped += 1
                continue
            files[path] = bytes(payload)
    except ArchiveError:
        raise
    except (
        tarfile.TarError, OSError, EOFError, UnicodeError, ValueError, zlib.error
    ) as e:
        raise ArchiveError(f"Failed to load asset archive: {e}") from e

    logger.debug(
        "Loaded %d files from asset archive (%d entries skipped)",
        len(files),
        skipped,
    )
    return files
