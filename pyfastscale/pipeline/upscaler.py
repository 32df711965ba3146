"""
Upscaler: the pipeline orchestrator.

Runs, for one image at a time:
    resample -> classify transparency -> enhance -> blend
and hands the finished raster back (or writes it, for the file helpers).

The pixels are uploaded once into a pooled Taichi field, every stage mutates
that field in place, and the result is downloaded once at the end. Nothing is
kept between images except recycled pool fields.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional

from .. import constants as cte
from ..errors import AllocationFailure, UnsupportedFormat
from ..io import imageio
from ..raster import Raster, SourceFormat, fields, has_transparency
from ..rastermanip import check_scale_factor, resample_field
from .config import UpscaleConfig
from .passes import select_pass

logger = logging.getLogger(__name__)


class Upscaler:
    """
    Upscale rasters by an integer factor and run the quality passes.

    Args:
        config: Pipeline configuration (default: UpscaleConfig())
    """

    def __init__(self, config: Optional[UpscaleConfig] = None) -> None:
        self.config = (config or UpscaleConfig()).validate()

    # ─── Core ───────────────────────────────────────────────────────
    def process_raster(
        self,
        raster: Raster,
        fmt: Optional[SourceFormat] = None,
        scale_factor: Optional[int] = None,
    ) -> Raster:
        """
        Upscale one decoded raster.

        Args:
            raster: Decoded source raster
            fmt: Format tag overriding ``raster.fmt``
            scale_factor: Factor overriding the configured one

        Returns:
            Raster: New raster of size (F*nx, F*ny) with the same format,
            palette and path as the input

        Raises:
            UnsupportedFormat: If the format tag is not a SourceFormat
            AllocationFailure: If a pixel buffer cannot be created
            ValueError: If the scale factor is not a positive integer
        """
        if fmt is not None:
            if not isinstance(fmt, SourceFormat):
                raise UnsupportedFormat(f"Unsupported format tag: {fmt!r}")
            raster = Raster(pixels=raster.pixels, fmt=fmt, palette=raster.palette, path=raster.path)
        factor = check_scale_factor(
            self.config.scale_factor if scale_factor is None else scale_factor
        )

        nx, ny = raster.nx, raster.ny
        nx_t, ny_t = nx * factor, ny * factor
        transparent = has_transparency(raster)
        quality = select_pass(transparent, self.config.contrast)
        logger.info(
            "upscaling %dx%d -> %dx%d (%s branch, format=%s)",
            nx, ny, nx_t, ny_t, quality.name, raster.fmt.value,
        )

        started = time.perf_counter()
        try:
            source = fields.upload(raster.pixels.reshape(-1, cte.CHANNELS))
            try:
                work = resample_field(source.field, nx, ny, nx_t, ny_t)
            finally:
                source.release()

            try:
                quality.enhance(work.field, nx_t, ny_t)
                quality.blend(work.field, nx_t, ny_t)
                pixels = fields.download(work.field, nx_t, ny_t)
            finally:
                work.release()
        except MemoryError as e:
            raise AllocationFailure(f"Out of memory for a {nx_t}x{ny_t} raster") from e

        logger.debug("upscale finished in %.3fs", time.perf_counter() - started)
        return raster.with_pixels(pixels)

    # ─── File helpers ───────────────────────────────────────────────
    def output_path_for(self, input_path: Path | str, output_folder: Path | str | None = None) -> Path:
        """Return ``<output_folder>/<prefix><name>`` (default: next to the input)."""
        input_path = Path(input_path)
        folder = Path(output_folder) if output_folder is not None else input_path.parent
        return folder / f"{self.config.output_prefix}{input_path.name}"

    def upscale_file(self, input_path: Path | str, output_path: Path | str | None = None) -> Path:
        """
        Decode, upscale and encode one image file.

        Args:
            input_path: Source JPEG, PNG or GIF
            output_path: Destination (default: prefixed name next to the input)

        Returns:
            Path: Where the upscaled image was written

        Raises:
            FileNotFoundError: If the input does not exist
            UnsupportedFormat: If the input is not JPEG, PNG or GIF
            DecodeFailure: If the input cannot be decoded
            AllocationFailure: If a pixel buffer cannot be created
        """
        input_path = Path(input_path)
        output_path = Path(output_path) if output_path is not None else self.output_path_for(input_path)

        raster = imageio.load_raster(input_path)
        result = self.process_raster(raster)
        imageio.save_raster(
            result,
            output_path,
            jpeg_quality=self.config.jpeg_quality,
            png_compress_level=self.config.png_compress_level,
            transparent=has_transparency(raster),
        )
        logger.info("wrote %s", output_path)
        return output_path
