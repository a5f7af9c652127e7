"""Shared test fixtures."""

import shutil
import struct
import tempfile

import pytest

from ddscubemap.config import CubemapConfig


@pytest.fixture
def tmp_dir():
    d = tempfile.mkdtemp()
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def default_config():
    return CubemapConfig()


@pytest.fixture
def dxt5_header_bytes():
    """A 128-byte 256x256 DXT5 container header with a full mip chain."""
    buf = bytearray(128)
    buf[0:4] = b"DDS "
    struct.pack_into("<I", buf, 4, 124)
    struct.pack_into("<I", buf, 8, 0x1 | 0x2 | 0x4 | 0x1000 | 0x20000)
    struct.pack_into("<I", buf, 12, 256)
    struct.pack_into("<I", buf, 16, 256)
    struct.pack_into("<I", buf, 20, 65536)
    struct.pack_into("<I", buf, 28, 9)
    buf[32:76] = bytes(range(44))
    struct.pack_into("<I", buf, 76, 32)
    struct.pack_into("<I", buf, 80, 0x4)
    buf[84:88] = b"DXT5"
    struct.pack_into("<I", buf, 108, 0x1000 | 0x8 | 0x400000)
    buf[124:128] = b"\xaa\xbb\xcc\xdd"
    return bytes(buf)
