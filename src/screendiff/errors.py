"""Custom exceptions used across screendiff."""

__all__ = ["ScreenDiffError", "DecodeError", "BoundsError"]


class ScreenDiffError(Exception):
    """Base class for errors raised by the comparison engine."""

    pass


class DecodeError(ScreenDiffError):
    """Raised when image bytes cannot be decoded into an RGBA raster."""

    pass


class BoundsError(ScreenDiffError, ValueError):
    """Raised when a crop rectangle does not fit inside the source image."""

    pass
