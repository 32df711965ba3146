"""
Area-averaging resampling for PyFastScale.

Every destination pixel covers a rectangle of the source image once both are
mapped onto the same coordinate frame. The destination value is the average of
the source pixels under that rectangle, each weighted by its overlap area. All
four channels (alpha included) are resampled the same way.

For an integer upscale factor F each destination pixel falls inside a single
source pixel, so every F x F block of the output carries the colour of its
source pixel exactly.
"""

import numpy as np
import taichi as ti

from .. import constants as cte
from .. import pool
from ..raster import fields


@ti.kernel
def area_resample_kernel(
    source_field: ti.template(),
    target_field: ti.template(),
    nx_src: ti.i32,
    ny_src: ti.i32,
    nx_t: ti.i32,
    ny_t: ti.i32,
):
    """
    Resample an RGBA field by area averaging.

    Args:
        source_field: Source pixels (nx_src * ny_src, 4)
        target_field: Output pixels (nx_t * ny_t, 4)
        nx_src: Number of columns in the source
        ny_src: Number of rows in the source
        nx_t: Number of columns in the target
        ny_t: Number of rows in the target
    """
    for idx in range(nx_t * ny_t):
        j_t = idx // nx_t
        i_t = idx % nx_t

        # Footprint of the target pixel in source coordinates
        x0 = i_t * nx_src / nx_t
        x1 = (i_t + 1) * nx_src / nx_t
        y0 = j_t * ny_src / ny_t
        y1 = (j_t + 1) * ny_src / ny_t

        j_start = ti.max(ti.floor(y0, dtype=ti.i32), 0)
        j_end = ti.min(ti.cast(ti.ceil(y1), ti.i32), ny_src)
        i_start = ti.max(ti.floor(x0, dtype=ti.i32), 0)
        i_end = ti.min(ti.cast(ti.ceil(x1), ti.i32), nx_src)

        acc = ti.Vector([0.0, 0.0, 0.0, 0.0])
        wsum = 0.0
        for j in range(j_start, j_end):
            wy = ti.min(y1, j + 1.0) - ti.max(y0, ti.cast(j, ti.f32))
            for i in range(i_start, i_end):
                wx = ti.min(x1, i + 1.0) - ti.max(x0, ti.cast(i, ti.f32))
                w = wx * wy
                if w > 0.0:
                    src_idx = j * nx_src + i
                    for c in ti.static(range(cte.CHANNELS)):
                        acc[c] += source_field[src_idx, c] * w
                    wsum += w

        for c in ti.static(range(cte.CHANNELS)):
            val = 0
            if wsum > 0.0:
                val = ti.floor(acc[c] / wsum + 0.5, dtype=ti.i32)
            target_field[idx, c] = ti.min(ti.max(val, 0), cte.CHANNEL_MAX)


def resample_raster(
    grid_data,
    nx_t: int,
    ny_t: int,
    return_field: bool = False,
    nx: int | None = None,
    ny: int | None = None,
):
    """
    Resample RGBA pixels to an explicit target size by area averaging.

    Args:
        grid_data: NumPy array (ny, nx, 4) or Taichi field (nx * ny, 4)
        nx_t: Target number of columns (>= 1)
        ny_t: Target number of rows (>= 1)
        return_field: If True, return the pooled Taichi field instead of a
                      NumPy array
        nx: Width when supplying a Taichi field
        ny: Height when supplying a Taichi field

    Returns:
        numpy.ndarray (ny_t, nx_t, 4) uint8 or taichi.Field (nx_t * ny_t, 4)
    """
    if nx_t < 1 or ny_t < 1:
        raise ValueError("Target dimensions must be >= 1")

    data_np, nx, ny = fields.flat_rgba(grid_data, nx, ny)

    source_field = fields.upload(data_np)
    try:
        target_field = resample_field(source_field.field, nx, ny, nx_t, ny_t)
    finally:
        source_field.release()

    if return_field:
        return target_field.field
    result = fields.download(target_field.field, nx_t, ny_t)
    target_field.release()
    return result


def resample_field(source_field, nx, ny, nx_t, ny_t):
    """
    Field-level resampling used by the pipeline.

    Returns:
        TPField: pooled handle on the (nx_t * ny_t, 4) target field; the caller
                 owns it and must release it
    """
    target_field = pool.get_temp_field(cte.PIXEL_TYPE_TI, (nx_t * ny_t, cte.CHANNELS))
    area_resample_kernel(source_field, target_field.field, nx, ny, nx_t, ny_t)
    return target_field


def check_scale_factor(factor):
    """Validate an integer upscale factor and return it as int."""
    if isinstance(factor, bool) or not isinstance(factor, (int, np.integer)):
        raise ValueError(f"scale factor must be a positive integer, got {factor!r}")
    if factor < 1:
        raise ValueError(f"scale factor must be a positive integer, got {factor!r}")
    return int(factor)


def upscale_raster(
    grid_data,
    factor: int = cte.DEFAULT_SCALE_FACTOR,
    return_field: bool = False,
    nx: int | None = None,
    ny: int | None = None,
):
    """
    Enlarge RGBA pixels by an integer factor.

    Args:
        grid_data: NumPy array (ny, nx, 4) or Taichi field (nx * ny, 4)
        factor: Positive integer scale factor (default: 4)
        return_field: If True, return Taichi field; if False, NumPy array
        nx: Width when supplying a Taichi field
        ny: Height when supplying a Taichi field

    Returns:
        numpy.ndarray or taichi.Field: Pixels with shape (F*ny, F*nx, 4)

    Example:
        # 16 px sprite to 64 px
        big = upscale_raster(sprite_rgba, factor=4)
    """
    factor = check_scale_factor(factor)
    data_np, nx, ny = fields.flat_rgba(grid_data, nx, ny)
    return resample_raster(
        data_np.reshape(ny, nx, cte.CHANNELS),
        nx * factor,
        ny * factor,
        return_field=return_field,
    )


__all__ = [
    "area_resample_kernel",
    "resample_raster",
    "resample_field",
    "upscale_raster",
    "check_scale_factor",
]
