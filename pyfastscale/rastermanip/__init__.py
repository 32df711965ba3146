"""Raster manipulation module for PyFastScale.

Provides Taichi-accelerated area-averaging resampling of RGBA rasters. The
functions accept NumPy arrays or Taichi fields and return either, drawing
scratch buffers from the shared field pool.
"""

from .resampling import (
    area_resample_kernel,
    check_scale_factor,
    resample_field,
    resample_raster,
    upscale_raster,
)

__all__ = [
    "area_resample_kernel",
    "check_scale_factor",
    "resample_field",
    "resample_raster",
    "upscale_raster",
]
