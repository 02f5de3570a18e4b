"""Read-only file handle and the asset source interface.

Defines the common interface for asset lookups (AssetFS, AssetContext)
and the buffered file object every successful lookup returns.
"""

from __future__ import annotations

import io
import os
from typing import Protocol, runtime_checkable


class AssetFile:
    """Fully-buffered, read-only file.

    Wraps an immutable byte buffer and a read cursor. A fresh handle
    always starts at offset zero, and the cursor never moves past the
    end of the buffer.

    Attributes:
        path: The asset path the handle was opened from (for messages).
    """

    def __init__(self, content: bytes, path: str = ""):
        """Initialize a read-only file over ``content``.

        Args:
            content: The file bytes. Copied into an immutable ``bytes``.
            path: Asset path, used in error messages.
        """
        self._content = bytes(content)
        self._pos = 0
        self._closed = False
        self.path = path

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError(f"I/O operation on closed file: {self.path}")

    def read(self, size: int | None = -1) -> bytes:
        """Read up to ``size`` bytes (all remaining bytes if negative).

        Args:
            size: Maximum number of bytes to read.

        Returns:
            The bytes read; empty at end of file.

        Raises:
            ValueError: If the file is closed.
        """
        self._check_open()
        if size is None or size < 0:
            end = len(self._content)
        else:
            end = min(self._pos + size, len(self._content))
        data = self._content[self._pos:end]
        self._pos = end
        return data

    def read1(self, size: int = -1) -> bytes:
        return self.read(size)

    def readinto(self, buffer: bytearray | memoryview) -> int:
        """Read bytes into a pre-allocated, writable buffer."""
        view = memoryview(buffer).cast("B")
        data = self.read(len(view))
        view[: len(data)] = data
        return len(data)

    def readline(self, size: int | None = -1) -> bytes:
        """Read up to and including the next newline."""
        self._check_open()
        newline = self._content.find(b"\n", self._pos)
        end = len(self._content) if newline == -1 else newline + 1
        if size is not None and size >= 0:
            end = min(end, self._pos + size)
        data = self._content[self._pos:end]
        self._pos = end
        return data

    def readlines(self) -> list[bytes]:
        return list(self)

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        """Move the cursor, clamped to the buffer bounds.

        Args:
            offset: Byte offset relative to ``whence``.
            whence: ``os.SEEK_SET``, ``os.SEEK_CUR`` or ``os.SEEK_END``.

        Returns:
            The new absolute position.
        """
        self._check_open()
        if whence == os.SEEK_SET:
            base = 0
        elif whence == os.SEEK_CUR:
            base = self._pos
        elif whence == os.SEEK_END:
            base = len(self._content)
        else:
            raise ValueError(f"Invalid whence: {whence}")
        self._pos = max(0, min(base + offset, len(self._content)))
        return self._pos

    def tell(self) -> int:
        """Return current position in the buffer."""
        self._check_open()
        return self._pos

    def getvalue(self) -> bytes:
        """Return the whole file content regardless of cursor position."""
        self._check_open()
        return self._content

    @property
    def size(self) -> int:
        return len(self._content)

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def writable(self) -> bool:
        return False

    def write(self, data: bytes) -> int:
        """Write is not supported for read-only files."""
        raise io.UnsupportedOperation("write")

    def close(self) -> None:
        self._closed = True

    @property
    def closed(self) -> bool:
        """Return True if the file is closed."""
        return self._closed

    def __iter__(self):
        while True:
            line = self.readline()
            if not line:
                return
            yield line

    def __enter__(self) -> "AssetFile":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"AssetFile(path={self.path!r}, size={self.size}, pos={self._pos})"


@runtime_checkable
class AssetSource(Protocol):
    """Anything that resolves asset paths to read-only files.

    Lookups either return a fresh ``AssetFile`` positioned at offset
    zero or raise ``FileNotFoundError`` naming the normalized path.
    """

    def open(self, path: str | os.PathLike[str]) -> AssetFile:
        """Open an asset for reading."""
        ...
