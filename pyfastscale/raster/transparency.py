"""
Transparency classification.

Decides once per source image whether the alpha-aware branch of the pipeline
must run. Formats with a native alpha channel always qualify; palette sources
qualify only when at least one palette entry is not fully opaque.
"""

import numpy as np

from .. import constants as cte
from ..errors import UnsupportedFormat
from .raster import Raster, SourceFormat


def has_transparency(raster: Raster) -> bool:
    """
    Return True if the raster carries meaningful transparency.

    Args:
        raster: Decoded source raster

    Returns:
        bool: Always True for RGBA sources, always False for RGB sources.
              For palette sources, True iff any palette entry has an alpha
              below fully opaque. Palette rasters without a palette table fall
              back to the distinct alpha values of their pixels.

    Raises:
        UnsupportedFormat: If the raster's format tag is not recognised
    """
    fmt = raster.fmt
    if fmt is SourceFormat.RGBA:
        return True
    if fmt is SourceFormat.RGB:
        return False
    if fmt is SourceFormat.PALETTE:
        if raster.palette is not None and len(raster.palette):
            entries = raster.palette[:, 3]
        else:
            entries = np.unique(raster.alpha)
        return bool(np.any(entries < cte.ALPHA_OPAQUE))
    raise UnsupportedFormat(f"Unsupported format tag: {fmt!r}")
