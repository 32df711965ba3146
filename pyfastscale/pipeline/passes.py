"""
Quality passes run after resampling.

A quality pass is the pair {enhance, blend}. Both methods mutate a pooled
pixel field of shape (nx * ny, 4) in place. The opaque pass sharpens by
convolution; the alpha pass uses the per-pixel push and the visibility-aware
blend so alpha is never modified.
"""

from __future__ import annotations

from typing import Protocol

from .. import constants as cte
from ..blend import blend_field, blend_field_alpha
from ..enhance import enhance_field, enhance_field_alpha


class QualityPass(Protocol):
    """Interface shared by the opaque and alpha-aware branches."""

    name: str

    def enhance(self, work_field, nx: int, ny: int) -> None:
        """Sharpen the working field in place."""

    def blend(self, work_field, nx: int, ny: int) -> None:
        """Soften the sharpened working field in place."""


class OpaquePass:
    """Convolution sharpening + contrast, then 60/40 smoothing merge."""

    name = "opaque"

    def __init__(self, contrast: float = cte.DEFAULT_CONTRAST) -> None:
        self.contrast = contrast

    def enhance(self, work_field, nx: int, ny: int) -> None:
        enhance_field(work_field, nx, ny, self.contrast)

    def blend(self, work_field, nx: int, ny: int) -> None:
        blend_field(work_field, nx, ny, cte.BLEND_KEEP)


class AlphaPass:
    """Local-contrast push, then 70/30 blend over visible neighbours."""

    name = "alpha"

    def enhance(self, work_field, nx: int, ny: int) -> None:
        enhance_field_alpha(work_field, nx, ny)

    def blend(self, work_field, nx: int, ny: int) -> None:
        blend_field_alpha(work_field, nx, ny, cte.ALPHA_BLEND_KEEP)


def select_pass(transparent: bool, contrast: float = cte.DEFAULT_CONTRAST) -> QualityPass:
    """Pick the branch for one image from its transparency flag."""
    if transparent:
        return AlphaPass()
    return OpaquePass(contrast=contrast)
