"""
Upscaling pipeline for PyFastScale.

- config: UpscaleConfig dataclass and YAML/JSON loader
- passes: QualityPass contract with OpaquePass and AlphaPass branches
- upscaler: Upscaler orchestrator (resample, classify, enhance, blend)
"""

from .config import UpscaleConfig, load_config
from .passes import AlphaPass, OpaquePass, QualityPass, select_pass
from .upscaler import Upscaler

__all__ = [
    "UpscaleConfig",
    "load_config",
    "AlphaPass",
    "OpaquePass",
    "QualityPass",
    "select_pass",
    "Upscaler",
]
