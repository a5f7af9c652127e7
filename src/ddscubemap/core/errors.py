"""Exceptions raised while reading, validating and assembling cube faces."""

from typing import Optional

from .. import FACE_LABELS


def _face_prefix(face_index: Optional[int], path: Optional[str]) -> str:
    if face_index is None:
        return ""
    label = FACE_LABELS[face_index] if 0 <= face_index < len(FACE_LABELS) else "?"
    if path:
        return f"face #{face_index} ({label}) '{path}': "
    return f"face #{face_index} ({label}): "


class CubemapError(RuntimeError):
    """Base class for every fatal cube map assembly failure."""


class CubemapIOError(CubemapError):
    """Raised when a face or the output file cannot be read or written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"I/O error on '{path}': {reason}")


class FormatError(CubemapError):
    """Raised by header decoding when a buffer is not a DDS container."""


class NotDdsError(CubemapError):
    """Raised when an input face is not a DDS file."""

    def __init__(self, face_index: int, path: str, reason: str):
        self.face_index = face_index
        self.path = path
        self.reason = reason
        super().__init__(f"{_face_prefix(face_index, path)}not a DDS file ({reason})")


class InvalidHeaderError(CubemapError):
    """Raised when a header field violates the DDS structural invariants."""

    def __init__(self, field: str, expected, actual,
                 face_index: Optional[int] = None, path: Optional[str] = None):
        self.field = field
        self.expected = expected
        self.actual = actual
        self.face_index = face_index
        self.path = path
        super().__init__(
            f"{_face_prefix(face_index, path)}invalid DDS header: "
            f"{field} is {actual} (expected {expected})"
        )


class NotCubemapCompatibleError(CubemapError):
    """Raised when a face is not square."""

    def __init__(self, face_index: int, path: str, width: int, height: int):
        self.face_index = face_index
        self.path = path
        self.width = width
        self.height = height
        super().__init__(
            f"{_face_prefix(face_index, path)}{width}x{height} is not suitable "
            "for a cube map (faces must be square)"
        )


class InconsistentFacesError(CubemapError):
    """Raised when a face disagrees with face 0 on size or pixel format."""

    def __init__(self, face_index: int, path: str, field: str, expected, actual):
        self.face_index = face_index
        self.path = path
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{_face_prefix(face_index, path)}inconsistent definition: "
            f"{field} is {actual!r}, face #0 has {expected!r}"
        )
