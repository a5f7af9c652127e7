"""Provide package metadata for `ddscubemap`."""

__version__ = "1.0.0"

# Positional order of the six cube faces on the command line and in the output.
FACE_LABELS = ("PX", "NX", "PY", "NY", "PZ", "NZ")

__all__ = ["__version__", "FACE_LABELS"]
