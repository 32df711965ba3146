"""
Colour blending for rasters with transparency.

Works in two phases so that no pixel ever averages an already blended
neighbour:

1. smooth: for each visible pixel, average r, g, b over the 3x3 neighbourhood
   (clipped at the edges) using only neighbours that are not fully
   transparent, then write round(0.7 * original + 0.3 * average) into a
   scratch field.
2. restore: copy the blended colours back onto visible pixels, keeping each
   pixel's original alpha.

Fully transparent pixels never contribute to an average and are never written.
"""

import taichi as ti

from .. import constants as cte
from .. import pool
from ..raster import fields


@ti.func
def _round(v: ti.f32) -> ti.i32:
    return ti.floor(v + 0.5, dtype=ti.i32)


@ti.kernel
def masked_smooth_kernel(
    source_field: ti.template(),
    target_field: ti.template(),
    nx: ti.i32,
    ny: ti.i32,
    keep: ti.f32,
):
    """
    Blend each visible pixel with the mean of its visible neighbours.

    Args:
        source_field: Pixels to read (nx * ny, 4)
        target_field: Scratch pixels to write (nx * ny, 4)
        nx: Number of columns
        ny: Number of rows
        keep: Share of the original colour kept
    """
    for idx in range(nx * ny):
        j = idx // nx
        i = idx % nx

        for c in ti.static(range(cte.CHANNELS)):
            target_field[idx, c] = source_field[idx, c]

        if source_field[idx, 3] != cte.ALPHA_TRANSPARENT:
            acc = ti.Vector([0, 0, 0])
            count = 0
            for dj in ti.static(range(-1, 2)):
                for di in ti.static(range(-1, 2)):
                    nj = j + dj
                    ni = i + di
                    if 0 <= nj < ny and 0 <= ni < nx:
                        nidx = nj * nx + ni
                        if source_field[nidx, 3] != cte.ALPHA_TRANSPARENT:
                            for c in ti.static(range(cte.COLOR_CHANNELS)):
                                acc[c] += source_field[nidx, c]
                            count += 1

            if count > 0:
                for c in ti.static(range(cte.COLOR_CHANNELS)):
                    avg = _round(acc[c] / count)
                    v = _round(keep * source_field[idx, c] + (1.0 - keep) * avg)
                    target_field[idx, c] = ti.min(ti.max(v, 0), cte.CHANNEL_MAX)


@ti.kernel
def restore_colors_kernel(
    work_field: ti.template(),
    blended_field: ti.template(),
    n: ti.i32,
):
    """Copy blended colours onto visible pixels, keeping the working alpha."""
    for idx in range(n):
        if work_field[idx, 3] != cte.ALPHA_TRANSPARENT:
            for c in ti.static(range(cte.COLOR_CHANNELS)):
                work_field[idx, c] = blended_field[idx, c]


def blend_field_alpha(work_field, nx, ny, keep=cte.ALPHA_BLEND_KEEP):
    """Alpha-aware blend of a pixel field in place using one scratch field."""
    n = nx * ny
    blended = pool.get_temp_field(cte.PIXEL_TYPE_TI, (n, cte.CHANNELS))
    try:
        masked_smooth_kernel(work_field, blended.field, nx, ny, keep)
        restore_colors_kernel(work_field, blended.field, n)
    finally:
        blended.release()


def blend_colors_alpha(
    grid_data,
    keep: float = cte.ALPHA_BLEND_KEEP,
    return_field: bool = False,
    nx: int | None = None,
    ny: int | None = None,
):
    """
    Blend visible pixels with their visible neighbourhood, preserving alpha.

    Args:
        grid_data: NumPy array (ny, nx, 4) or Taichi field (nx * ny, 4)
        keep: Share of the original colour kept (default: 0.7)
        return_field: If True, return Taichi field; if False, NumPy array
        nx: Width when supplying a Taichi field
        ny: Height when supplying a Taichi field

    Returns:
        numpy.ndarray or taichi.Field: Blended pixels. Alpha and every fully
        transparent pixel are identical to the input.
    """
    if not 0.0 <= keep <= 1.0:
        raise ValueError("keep must be within [0, 1]")
    return fields.run_on_pixels(
        grid_data,
        lambda f, w, h: blend_field_alpha(f, w, h, keep),
        return_field=return_field,
        nx=nx,
        ny=ny,
    )


__all__ = [
    "masked_smooth_kernel",
    "restore_colors_kernel",
    "blend_field_alpha",
    "blend_colors_alpha",
]
