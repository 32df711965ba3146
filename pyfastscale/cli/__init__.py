"""
Command Line Interface for PyFastScale

This module provides command line utilities for PyFastScale, enabling
image upscaling from the terminal without writing Python scripts.

Available Commands:
- upscale: Upscale one JPEG, PNG or GIF image
- watch: Monitor a folder and upscale every new image
- batch: Upscale a whole folder once and print a JSON summary
- compare: Render a side-by-side preview of an image and its upscaled result
"""

_CLI_SUBMODULES = {
    "upscale": (".upscale_commands", "upscale"),
    "watch": (".watch_commands", "watch"),
    "batch": (".watch_commands", "batch"),
    "compare": (".compare_commands", "compare"),
}

__all__ = list(_CLI_SUBMODULES.keys())


def __getattr__(name):
    info = _CLI_SUBMODULES.get(name)
    if info is None:
        raise AttributeError(name)
    pkg, attr = info
    import importlib
    mod = importlib.import_module(pkg, __package__)
    obj = getattr(mod, attr)
    globals()[name] = obj
    return obj
