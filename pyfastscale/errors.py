"""Exceptions raised while upscaling a single image."""


class UpscaleError(RuntimeError):
    """Base class for failures local to one image."""


class UnsupportedFormat(UpscaleError):
    """Raised when the source is not a JPEG, PNG or GIF raster."""


class DecodeFailure(UpscaleError):
    """Raised when the source bytes cannot be turned into a raster."""


class AllocationFailure(UpscaleError):
    """Raised when a destination or scratch buffer cannot be created."""


__all__ = ["UpscaleError", "UnsupportedFormat", "DecodeFailure", "AllocationFailure"]
