"""
Conversions between NumPy pixel arrays and pooled Taichi fields.

Pixel fields are flat: a scalar field of shape (nx * ny, 4) where row
``j * nx + i`` holds the r, g, b, a samples of column i, row j. This mirrors
the flat indexing used by every kernel in the package.
"""

import numpy as np

from .. import constants as cte
from .. import pool


def flat_rgba(grid_data, nx=None, ny=None):
    """
    Normalise input pixels to a flat int32 array.

    Args:
        grid_data: NumPy array of shape (ny, nx, 4) or Taichi field of shape
                   (nx * ny, 4)
        nx: Number of columns when providing a Taichi field
        ny: Number of rows when providing a Taichi field

    Returns:
        tuple: (data of shape (nx * ny, 4) as int32, nx, ny)
    """
    if isinstance(grid_data, np.ndarray):
        if grid_data.ndim != 3 or grid_data.shape[2] != cte.CHANNELS:
            raise ValueError("Input numpy array must have shape (ny, nx, 4)")
        ny, nx = grid_data.shape[:2]
        data_np = grid_data.reshape(-1, cte.CHANNELS).astype(np.int32)
    elif hasattr(grid_data, "to_numpy"):
        if len(grid_data.shape) != 2 or grid_data.shape[1] != cte.CHANNELS:
            raise ValueError("Input Taichi field must have shape (nx * ny, 4)")
        if nx is None or ny is None:
            raise ValueError("nx and ny must be provided for Taichi fields")
        if nx * ny != grid_data.shape[0]:
            raise ValueError("nx * ny does not match the size of the Taichi field")
        data_np = grid_data.to_numpy().astype(np.int32)
    else:
        raise TypeError("grid_data must be a numpy array or Taichi field")

    if nx < 1 or ny < 1:
        raise ValueError("Raster must be at least 1x1")
    return data_np, nx, ny


def upload(data_np):
    """Copy a flat (n, 4) array into a freshly checked-out pool field."""
    tpf = pool.get_temp_field(cte.PIXEL_TYPE_TI, data_np.shape)
    tpf.field.from_numpy(np.ascontiguousarray(data_np, dtype=np.int32))
    return tpf


def download(field, nx, ny):
    """Read a pixel field back as a (ny, nx, 4) uint8 array."""
    data = field.to_numpy().reshape(ny, nx, cte.CHANNELS)
    return np.clip(data, 0, cte.CHANNEL_MAX).astype(np.uint8)


def run_on_pixels(grid_data, stage, return_field=False, nx=None, ny=None):
    """
    Run an in-place field stage on NumPy or Taichi input.

    The input is copied into a pooled work field, ``stage(work_field, nx, ny)``
    mutates it, and the result is returned as a (ny, nx, 4) uint8 array or,
    with ``return_field``, as the pooled Taichi field itself.
    """
    data_np, nx, ny = flat_rgba(grid_data, nx, ny)
    work = upload(data_np)
    try:
        stage(work.field, nx, ny)
    except BaseException:
        work.release()
        raise

    if return_field:
        return work.field
    result = download(work.field, nx, ny)
    work.release()
    return result
