"""
Input/output for PyFastScale.

Pillow-backed decode and encode of JPEG, PNG and GIF images.
"""

from .imageio import (
    decode_image,
    encode_image,
    extract_palette,
    is_supported_image,
    load_raster,
    save_raster,
)

__all__ = [
    "decode_image",
    "encode_image",
    "extract_palette",
    "is_supported_image",
    "load_raster",
    "save_raster",
]
