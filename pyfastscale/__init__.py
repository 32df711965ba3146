"""
PyFastScale: GPU raster upscaling with edge enhancement.

Upscales JPEG, PNG and GIF rasters by an integer factor with area-averaging
resampling, then runs a sharpening pass and a colour blending pass. Images
carrying transparency go through alpha-aware variants of both passes that
never modify the alpha channel.

Submodules:
- raster: Raster container, source formats and transparency classification
- pool: Reusable Taichi field pool for scratch buffers
- rastermanip: Area-averaging resampling kernels
- enhance: Edge enhancement (sharpen convolution, alpha-aware contrast push)
- blend: Colour blending (smoothing merge, alpha-aware neighbourhood blend)
- pipeline: Configuration, quality passes and the Upscaler orchestrator
- io: Pillow decode/encode boundary
- watch: Folder polling and batch processing
- cli: Command line entry points

Usage:
    import pyfastscale as pfs

    pfs.init_backend("cpu")
    upscaler = pfs.pipeline.Upscaler()
    upscaler.upscale_file("tile.png", "upscaled_tile.png")
"""

import importlib

__version__ = "0.0.1"

_SUBMODULES = (
    "constants",
    "errors",
    "pool",
    "raster",
    "rastermanip",
    "enhance",
    "blend",
    "pipeline",
    "io",
    "watch",
    "cli",
    "logs",
)

__all__ = list(_SUBMODULES) + ["init_backend", "__version__"]


def init_backend(arch="cpu", **kwargs):
    """
    Initialise the Taichi runtime and reset the field pool.

    Fields allocated under a previous runtime are invalid after ``ti.init``,
    so the pool is cleared every time the backend is (re)initialised.

    Args:
        arch: 'cpu' or 'gpu'
        **kwargs: Extra keyword arguments forwarded to ``ti.init``
    """
    import taichi as ti

    from .pool import taipool

    archs = {"cpu": ti.cpu, "gpu": ti.gpu}
    if arch not in archs:
        raise ValueError("arch must be 'cpu' or 'gpu'")
    taipool.clear()
    ti.init(arch=archs[arch], **kwargs)


def __getattr__(name):
    if name not in _SUBMODULES:
        raise AttributeError(f"module 'pyfastscale' has no attribute '{name}'")
    module = importlib.import_module(f".{name}", __name__)
    globals()[name] = module
    return module
