"""File helpers for reading cube faces and creating the output container."""

import logging
import os
from typing import BinaryIO

from .errors import CubemapIOError

logger = logging.getLogger("ddscubemap.io")


def read_face_bytes(path: str) -> bytes:
    """Read an entire face file into memory.

    Raises CubemapIOError if the file cannot be opened or fewer bytes than
    the file's size were read.
    """
    try:
        with open(path, "rb") as f:
            expected = os.fstat(f.fileno()).st_size
            data = f.read()
    except OSError as exc:
        raise CubemapIOError(path, f"unable to read file ({exc.strerror or exc})") from exc
    if len(data) != expected:
        raise CubemapIOError(
            path, f"short read: got {len(data)} of {expected} bytes"
        )
    logger.debug("Read %d bytes from %s", len(data), path)
    return data


def open_output(path: str) -> BinaryIO:
    """Create (or truncate) the output container for binary writing.

    The parent directory must already exist.
    """
    try:
        return open(path, "wb")
    except OSError as exc:
        raise CubemapIOError(
            path, f"unable to write result file ({exc.strerror or exc})"
        ) from exc
