"""Per-face and per-run records."""

from dataclasses import dataclass, field
from typing import List

from .header import DDS_CONTAINER_HEADER_SIZE, DDSHeader


@dataclass
class FaceFile:
    """One input face, alive only while its payload is being copied."""

    index: int
    label: str
    path: str
    data: bytes
    header: DDSHeader
    expected_mips: int

    @property
    def payload(self) -> memoryview:
        """Pixel data following the 128-byte header region."""
        return memoryview(self.data)[DDS_CONTAINER_HEADER_SIZE:]


@dataclass
class AssemblyResult:
    """Outcome of a successful assembly run."""

    output_path: str
    face_headers: List[DDSHeader]
    output_header: DDSHeader
    bytes_written: int
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Return a plain summary suitable for logging."""
        return {
            "output_path": self.output_path,
            "size": f"{self.output_header.width}x{self.output_header.height}",
            "format": self.output_header.four_cc_text,
            "mip_map_count": self.output_header.mip_map_count,
            "bytes_written": self.bytes_written,
            "warnings": list(self.warnings),
        }
