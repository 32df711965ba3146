"""
Taichi field pool for PyFastScale.

Taichi fields are expensive to create and every distinct field passed to a
kernel as ``ti.template()`` triggers a new compilation. The pool keeps released
fields around and hands them back out when a field with the same dtype and
shape is requested again, so repeated images of the same size reuse both the
memory and the compiled kernels.

Usage:
    tp = taipool.get_tpfield(dtype=ti.i32, shape=(nx * ny, 4))
    try:
        some_kernel(tp.field, ...)
    finally:
        tp.release()
"""

import threading

import taichi as ti

from ..errors import AllocationFailure


class TPField:
    """
    Handle on a pooled Taichi field.

    Attributes:
        field: The underlying Taichi field
        dtype: Taichi dtype of the field
        shape: Shape tuple of the field
        in_use: True while the handle is checked out of the pool
    """

    def __init__(self, pool, field, dtype, shape, generation):
        self._pool = pool
        self._generation = generation
        self.field = field
        self.dtype = dtype
        self.shape = shape
        self.in_use = True

    def release(self):
        """Return the field to the pool. Releasing twice is a no-op."""
        if self.in_use:
            self._pool._give_back(self)

    def __repr__(self):
        state = "in use" if self.in_use else "free"
        return f"TPField(dtype={self.dtype}, shape={self.shape}, {state})"


class TaiPool:
    """Keyed pool of reusable Taichi fields."""

    def __init__(self):
        self._lock = threading.Lock()
        self._free = {}
        self._n_allocated = 0
        self._n_in_use = 0
        self._generation = 0

    def get_tpfield(self, dtype, shape):
        """
        Check out a field of the given dtype and shape.

        Args:
            dtype: Taichi dtype (e.g. ti.i32)
            shape: int or tuple of ints

        Returns:
            TPField: handle whose ``field`` attribute is the Taichi field

        Raises:
            AllocationFailure: If Taichi cannot create the field
        """
        if isinstance(shape, int):
            shape = (shape,)
        shape = tuple(int(s) for s in shape)
        if any(s <= 0 for s in shape):
            raise AllocationFailure(f"Cannot allocate a field of shape {shape}")
        key = (str(dtype), shape)

        with self._lock:
            bucket = self._free.get(key)
            if bucket:
                tpf = bucket.pop()
                tpf.in_use = True
                self._n_in_use += 1
                return tpf

        try:
            field = ti.field(dtype=dtype, shape=shape)
        except (RuntimeError, MemoryError) as e:
            raise AllocationFailure(
                f"Failed to allocate field of shape {shape}: {e}"
            ) from e

        with self._lock:
            self._n_allocated += 1
            self._n_in_use += 1
            generation = self._generation
        return TPField(self, field, dtype, shape, generation)

    def _give_back(self, tpf):
        with self._lock:
            tpf.in_use = False
            if tpf._generation != self._generation:
                # allocated before the last clear(), drop it
                return
            self._n_in_use -= 1
            self._free.setdefault((str(tpf.dtype), tpf.shape), []).append(tpf)

    def stats(self):
        """Return a dict with allocated, in-use and free field counts."""
        with self._lock:
            n_free = sum(len(b) for b in self._free.values())
            return {
                "allocated": self._n_allocated,
                "in_use": self._n_in_use,
                "free": n_free,
            }

    def clear(self):
        """
        Forget every pooled field.

        Must be called whenever the Taichi runtime is re-initialised, since
        fields from the previous runtime can no longer be used.
        """
        with self._lock:
            self._free = {}
            self._n_allocated = 0
            self._n_in_use = 0
            self._generation += 1


taipool = TaiPool()


def get_temp_field(dtype, shape):
    """Shortcut for ``taipool.get_tpfield``."""
    return taipool.get_tpfield(dtype=dtype, shape=shape)
