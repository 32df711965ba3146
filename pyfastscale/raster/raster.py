from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import numpy as np

from ..errors import UnsupportedFormat


class SourceFormat(Enum):
    """Format family of a decoded image."""

    RGB = "rgb"  # no alpha channel, JPEG-like
    RGBA = "rgba"  # native alpha channel, PNG-like
    PALETTE = "palette"  # palette-indexed, GIF-like

    @classmethod
    def from_pil_format(cls, pil_format: str | None) -> "SourceFormat":
        """Map a Pillow ``Image.format`` string onto a format family."""
        mapping = {"JPEG": cls.RGB, "PNG": cls.RGBA, "GIF": cls.PALETTE}
        if pil_format not in mapping:
            raise UnsupportedFormat(f"Unsupported image type: {pil_format}")
        return mapping[pil_format]


@dataclass
class Raster:
    """
    RGBA pixels plus the format they were decoded from.
    Alpha is always 0 (transparent) .. 255 (opaque), whatever the source format.
    """
    pixels: np.ndarray  # Shape (ny, nx, 4), dtype uint8, RGBA order.
    fmt: SourceFormat = SourceFormat.RGBA
    palette: np.ndarray | None = None  # Shape (K, 4) RGBA entries of a palette source.
    path: Path | None = None  # Source of the image.

    def __post_init__(self):
        pixels = np.asarray(self.pixels)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"pixels must have shape (ny, nx, 4), got {pixels.shape}")
        if pixels.shape[0] < 1 or pixels.shape[1] < 1:
            raise ValueError("Raster must be at least 1x1")
        if pixels.dtype != np.uint8:
            if not np.issubdtype(pixels.dtype, np.integer):
                raise ValueError(f"pixels must hold integer samples, got dtype {pixels.dtype}")
            if pixels.min() < 0 or pixels.max() > 255:
                raise ValueError("pixel values must lie in [0, 255]")
            pixels = pixels.astype(np.uint8)
        self.pixels = pixels
        if not isinstance(self.fmt, SourceFormat):
            raise UnsupportedFormat(f"Unsupported format tag: {self.fmt!r}")
        if self.palette is not None:
            palette = np.asarray(self.palette, dtype=np.uint8)
            if palette.ndim != 2 or palette.shape[1] != 4:
                raise ValueError("palette must have shape (K, 4)")
            self.palette = palette

    @property
    def nx(self) -> int:
        return self.pixels.shape[1]

    @property
    def ny(self) -> int:
        return self.pixels.shape[0]

    @property
    def alpha(self) -> np.ndarray:
        return self.pixels[..., 3]

    def with_pixels(self, pixels: np.ndarray) -> "Raster":
        """Return a raster sharing format, palette and path but holding new pixels."""
        return Raster(pixels=pixels, fmt=self.fmt, palette=self.palette, path=self.path)

    @classmethod
    def from_rgb(cls, rgb: np.ndarray, fmt: SourceFormat = SourceFormat.RGB, **kwargs) -> "Raster":
        """Build a fully opaque raster from an (ny, nx, 3) array."""
        rgb = np.asarray(rgb)
        if rgb.ndim != 3 or rgb.shape[2] != 3:
            raise ValueError(f"rgb must have shape (ny, nx, 3), got {rgb.shape}")
        alpha = np.full(rgb.shape[:2] + (1,), 255, dtype=np.uint8)
        return cls(pixels=np.concatenate([rgb.astype(np.uint8), alpha], axis=2), fmt=fmt, **kwargs)
