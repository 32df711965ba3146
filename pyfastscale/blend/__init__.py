"""
Colour blending module for PyFastScale.

- smoothing: 60/40 merge of the enhanced raster with a gaussian-smoothed copy
- alpha_smoothing: 70/30 blend with the mean of visible neighbours, alpha kept

Both run after edge enhancement to take the harsh edge off the sharpened
result.
"""

from .alpha_smoothing import (
    blend_colors_alpha,
    blend_field_alpha,
    masked_smooth_kernel,
    restore_colors_kernel,
)
from .smoothing import blend_colors, blend_field, merge_kernel, smooth_kernel

__all__ = [
    "blend_colors_alpha",
    "blend_field_alpha",
    "masked_smooth_kernel",
    "restore_colors_kernel",
    "blend_colors",
    "blend_field",
    "merge_kernel",
    "smooth_kernel",
]
