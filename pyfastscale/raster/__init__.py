"""
Raster container and helpers.

- Raster / SourceFormat: decoded RGBA pixels tagged with their format family
- has_transparency: selects the opaque or alpha-aware pipeline branch
- fields: NumPy <-> pooled Taichi field conversions
"""

from . import fields
from .raster import Raster, SourceFormat
from .transparency import has_transparency

__all__ = ["Raster", "SourceFormat", "has_transparency", "fields"]
