"""Core building blocks -- re-exports all public symbols for convenience."""

from .errors import (
    CubemapError,
    CubemapIOError,
    FormatError,
    NotDdsError,
    InvalidHeaderError,
    NotCubemapCompatibleError,
    InconsistentFacesError,
)
from .header import (
    DDS_MAGIC,
    DDS_HEADER_SIZE,
    DDS_PIXELFORMAT_SIZE,
    DDS_CONTAINER_HEADER_SIZE,
    DDSCAPS2_CUBEMAP_COMPLETE,
    PixelFormat,
    DDSHeader,
    decode,
    encode,
    encode_container_header,
    validate,
    expected_mip_count,
    set_complete_cubemap_flag,
)
from .io import read_face_bytes, open_output
from .records import FaceFile, AssemblyResult
from .logging import setup_logging

__all__ = [
    "CubemapError", "CubemapIOError", "FormatError", "NotDdsError",
    "InvalidHeaderError", "NotCubemapCompatibleError", "InconsistentFacesError",
    "DDS_MAGIC", "DDS_HEADER_SIZE", "DDS_PIXELFORMAT_SIZE",
    "DDS_CONTAINER_HEADER_SIZE", "DDSCAPS2_CUBEMAP_COMPLETE",
    "PixelFormat", "DDSHeader",
    "decode", "encode", "encode_container_header", "validate",
    "expected_mip_count", "set_complete_cubemap_flag",
    "read_face_bytes", "open_output",
    "FaceFile", "AssemblyResult",
    "setup_logging",
]
