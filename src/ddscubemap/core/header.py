"""DDS header model: decode, encode and validate the fixed 128-byte region.

Layout (all little-endian uint32 unless noted)::

    0    magic "DDS "
    4    dwSize (124)          8   dwFlags
    12   dwHeight              16  dwWidth
    20   dwPitchOrLinearSize   24  dwDepth
    28   dwMipMapCount         32  dwReserved1[11]  (44 bytes)
    76   ddspf (32 bytes: dwSize, dwFlags, dwFourCC, dwRGBBitCount, R/G/B/A masks)
    108  dwCaps  112 dwCaps2  116 dwCaps3  120 dwCaps4
    124  dwReserved2
    128  payload
"""

import dataclasses
import struct
from dataclasses import dataclass

from .errors import FormatError, InvalidHeaderError

DDS_MAGIC = b"DDS "
DDS_HEADER_SIZE = 124
DDS_PIXELFORMAT_SIZE = 32
# Magic plus header record; pixel payload starts here.
DDS_CONTAINER_HEADER_SIZE = len(DDS_MAGIC) + DDS_HEADER_SIZE

# Caps2 bits marking all six cube faces as present.
DDSCAPS2_CUBEMAP_COMPLETE = 0xFE00

_HEADER_STRUCT = struct.Struct("<7I44s2I4s5I4I4s")


@dataclass
class PixelFormat:
    """DDS_PIXELFORMAT sub-record."""

    size: int = DDS_PIXELFORMAT_SIZE
    flags: int = 0
    four_cc: bytes = b"\x00\x00\x00\x00"
    rgb_bit_count: int = 0
    r_bit_mask: int = 0
    g_bit_mask: int = 0
    b_bit_mask: int = 0
    a_bit_mask: int = 0


@dataclass
class DDSHeader:
    """DDS_HEADER record following the magic tag.

    ``reserved1`` and ``reserved2`` are kept as raw bytes so they are
    written back exactly as read.
    """

    size: int = DDS_HEADER_SIZE
    flags: int = 0
    height: int = 0
    width: int = 0
    pitch_or_linear_size: int = 0
    depth: int = 0
    mip_map_count: int = 0
    reserved1: bytes = bytes(44)
    pixel_format: PixelFormat = dataclasses.field(default_factory=PixelFormat)
    caps: int = 0
    caps2: int = 0
    caps3: int = 0
    caps4: int = 0
    reserved2: bytes = bytes(4)

    @property
    def is_complete_cubemap(self) -> bool:
        """Return True when the complete-cubemap bits are set in caps2."""
        return (self.caps2 & DDSCAPS2_CUBEMAP_COMPLETE) != 0

    @property
    def four_cc_text(self) -> str:
        return self.pixel_format.four_cc.rstrip(b"\x00").decode("ascii", errors="replace")

    def describe(self) -> str:
        """One-line summary used when logging each face."""
        return (
            f"{self.width}x{self.height} format {self.four_cc_text or '-'} "
            f"mips {self.mip_map_count}"
        )

    def copy(self) -> "DDSHeader":
        return dataclasses.replace(
            self, pixel_format=dataclasses.replace(self.pixel_format)
        )


def decode(buffer) -> DDSHeader:
    """Decode the container header at the start of ``buffer``.

    Only the structure is checked here (length and magic); field
    invariants are left to :func:`validate`.
    """
    if len(buffer) < DDS_CONTAINER_HEADER_SIZE:
        raise FormatError(
            f"file is {len(buffer)} bytes, shorter than the "
            f"{DDS_CONTAINER_HEADER_SIZE}-byte DDS header"
        )
    magic = bytes(buffer[:len(DDS_MAGIC)])
    if magic != DDS_MAGIC:
        raise FormatError(f"missing DDS magic tag (found {magic!r})")

    (size, flags, height, width, pitch, depth, mip_count, reserved1,
     pf_size, pf_flags, four_cc, rgb_bits, r_mask, g_mask, b_mask, a_mask,
     caps, caps2, caps3, caps4, reserved2) = _HEADER_STRUCT.unpack_from(
        buffer, len(DDS_MAGIC)
    )
    return DDSHeader(
        size=size,
        flags=flags,
        height=height,
        width=width,
        pitch_or_linear_size=pitch,
        depth=depth,
        mip_map_count=mip_count,
        reserved1=reserved1,
        pixel_format=PixelFormat(
            size=pf_size,
            flags=pf_flags,
            four_cc=four_cc,
            rgb_bit_count=rgb_bits,
            r_bit_mask=r_mask,
            g_bit_mask=g_mask,
            b_bit_mask=b_mask,
            a_bit_mask=a_mask,
        ),
        caps=caps,
        caps2=caps2,
        caps3=caps3,
        caps4=caps4,
        reserved2=reserved2,
    )


def encode(header: DDSHeader) -> bytes:
    """Encode ``header`` as the 124-byte DDS_HEADER record (no magic)."""
    pf = header.pixel_format
    return _HEADER_STRUCT.pack(
        header.size, header.flags, header.height, header.width,
        header.pitch_or_linear_size, header.depth, header.mip_map_count,
        bytes(header.reserved1),
        pf.size, pf.flags, bytes(pf.four_cc), pf.rgb_bit_count,
        pf.r_bit_mask, pf.g_bit_mask, pf.b_bit_mask, pf.a_bit_mask,
        header.caps, header.caps2, header.caps3, header.caps4,
        bytes(header.reserved2),
    )


def encode_container_header(header: DDSHeader) -> bytes:
    """Return magic + header, the full region that precedes the payload."""
    return DDS_MAGIC + encode(header)


def validate(header: DDSHeader) -> None:
    """Check the structural invariants of a decoded header.

    Raises InvalidHeaderError naming the first offending field.
    """
    if header.size != DDS_HEADER_SIZE:
        raise InvalidHeaderError("size", DDS_HEADER_SIZE, header.size)
    if header.pixel_format.size != DDS_PIXELFORMAT_SIZE:
        raise InvalidHeaderError(
            "pixel_format.size", DDS_PIXELFORMAT_SIZE, header.pixel_format.size
        )
    if header.width == 0:
        raise InvalidHeaderError("width", "non-zero", header.width)
    if header.height == 0:
        raise InvalidHeaderError("height", "non-zero", header.height)


def expected_mip_count(width: int, height: int) -> int:
    """Return the length of a full mip chain down to 1x1 for the larger side."""
    count = 1
    dim = max(width, height)
    while dim > 1:
        count += 1
        dim //= 2
    return count


def set_complete_cubemap_flag(header: DDSHeader) -> DDSHeader:
    """Mark ``header`` as a complete (six face) cube map. Idempotent."""
    header.caps2 |= DDSCAPS2_CUBEMAP_COMPLETE
    return header
