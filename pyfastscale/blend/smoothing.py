"""
Colour blending for opaque rasters.

Softens sharpening artefacts: a smoothed copy of the enhanced image is made
with a 3x3 gaussian approximation (1-2-1 weights, divisor 16, edge replicated)
and merged back as 60 % enhanced + 40 % smoothed per channel.
"""

import taichi as ti

from .. import constants as cte
from .. import pool
from ..raster import fields


@ti.func
def _clamp_index(i: ti.i32, n: ti.i32) -> ti.i32:
    return ti.min(ti.max(i, 0), n - 1)


@ti.kernel
def smooth_kernel(
    source_field: ti.template(),
    target_field: ti.template(),
    nx: ti.i32,
    ny: ti.i32,
):
    """
    Blur the colour channels of source into target.

    Args:
        source_field: Pixels to read (nx * ny, 4)
        target_field: Pixels to write (nx * ny, 4), must differ from source
        nx: Number of columns
        ny: Number of rows
    """
    for idx in range(nx * ny):
        j = idx // nx
        i = idx % nx

        acc = ti.Vector([0.0, 0.0, 0.0])
        for dj in ti.static(range(3)):
            for di in ti.static(range(3)):
                nidx = _clamp_index(j + dj - 1, ny) * nx + _clamp_index(i + di - 1, nx)
                for c in ti.static(range(cte.COLOR_CHANNELS)):
                    acc[c] += source_field[nidx, c] * cte.SMOOTH_KERNEL[dj][di]

        for c in ti.static(range(cte.COLOR_CHANNELS)):
            v = ti.floor(acc[c] / cte.SMOOTH_DIVISOR + cte.SMOOTH_OFFSET + 0.5, dtype=ti.i32)
            target_field[idx, c] = ti.min(ti.max(v, 0), cte.CHANNEL_MAX)
        target_field[idx, 3] = source_field[idx, 3]


@ti.kernel
def merge_kernel(
    work_field: ti.template(),
    blurred_field: ti.template(),
    n: ti.i32,
    keep: ti.f32,
):
    """
    Weighted merge of the working pixels with their blurred copy.

    work = round(keep * work + (1 - keep) * blurred), colour channels only.
    """
    for idx in range(n):
        for c in ti.static(range(cte.COLOR_CHANNELS)):
            v = keep * work_field[idx, c] + (1.0 - keep) * blurred_field[idx, c]
            work_field[idx, c] = ti.min(
                ti.max(ti.floor(v + 0.5, dtype=ti.i32), 0), cte.CHANNEL_MAX
            )


def blend_field(work_field, nx, ny, keep=cte.BLEND_KEEP):
    """Smooth-and-merge a pixel field in place using one scratch field."""
    n = nx * ny
    blurred = pool.get_temp_field(cte.PIXEL_TYPE_TI, (n, cte.CHANNELS))
    try:
        smooth_kernel(work_field, blurred.field, nx, ny)
        merge_kernel(work_field, blurred.field, n, keep)
    finally:
        blurred.release()


def blend_colors(
    grid_data,
    keep: float = cte.BLEND_KEEP,
    return_field: bool = False,
    nx: int | None = None,
    ny: int | None = None,
):
    """
    Blend an enhanced opaque raster with a smoothed copy of itself.

    Args:
        grid_data: NumPy array (ny, nx, 4) or Taichi field (nx * ny, 4)
        keep: Share of the enhanced pixels kept (default: 0.6)
        return_field: If True, return Taichi field; if False, NumPy array
        nx: Width when supplying a Taichi field
        ny: Height when supplying a Taichi field

    Returns:
        numpy.ndarray or taichi.Field: Blended pixels, same shape as input
    """
    if not 0.0 <= keep <= 1.0:
        raise ValueError("keep must be within [0, 1]")
    return fields.run_on_pixels(
        grid_data,
        lambda f, w, h: blend_field(f, w, h, keep),
        return_field=return_field,
        nx=nx,
        ny=ny,
    )


__all__ = ["smooth_kernel", "merge_kernel", "blend_field", "blend_colors"]
