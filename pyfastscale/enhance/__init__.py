"""
Edge enhancement module for PyFastScale.

- sharpen: 3x3 sharpening convolution plus contrast boost (opaque rasters)
- alpha_push: per-pixel local-contrast push that never touches alpha

Every public function accepts NumPy arrays of shape (ny, nx, 4) or Taichi
fields of shape (nx * ny, 4). The ``*_field`` variants mutate a field in place
and are what the pipeline uses.
"""

from .alpha_push import alpha_push_kernel, enhance_edges_alpha, enhance_field_alpha
from .sharpen import (
    contrast_factor,
    contrast_kernel,
    enhance_edges,
    enhance_field,
    sharpen_kernel,
)

__all__ = [
    "alpha_push_kernel",
    "enhance_edges_alpha",
    "enhance_field_alpha",
    "contrast_factor",
    "contrast_kernel",
    "enhance_edges",
    "enhance_field",
    "sharpen_kernel",
]
