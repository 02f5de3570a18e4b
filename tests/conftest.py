import io
import tarfile

import pytest


def build_tar(entries, mode="w"):
    """Build tar archive bytes from ``(name, payload)`` pairs, in order.

    A payload of None adds a directory member instead of a file.
    """
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode=mode) as archive:
        for name, payload in entries:
            info = tarfile.TarInfo(name)
            if payload is None:
                info.type = tarfile.DIRTYPE
                archive.addfile(info)
                continue
            info.size = len(payload)
            archive.addfile(info, io.BytesIO(payload))
    return buf.getvalue()


@pytest.fixture
def make_tar():
    return build_tar
