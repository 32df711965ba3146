"""
Fixed numeric parameters of the upscaling pipeline.

All values operate on 8-bit samples. Alpha uses 0 for fully transparent and
255 for fully opaque regardless of the source format.
"""

import taichi as ti

# Sample layout
CHANNELS = 4  # r, g, b, a
COLOR_CHANNELS = 3
CHANNEL_MAX = 255
ALPHA_TRANSPARENT = 0
ALPHA_OPAQUE = 255

# Taichi dtype used for every pixel field
PIXEL_TYPE_TI = ti.i32

# Resampling
DEFAULT_SCALE_FACTOR = 4

# Opaque edge enhancement: unsharp-style 3x3 kernel
SHARPEN_KERNEL = (
    (-1, -1, -1),
    (-1, 16, -1),
    (-1, -1, -1),
)
SHARPEN_DIVISOR = sum(sum(row) for row in SHARPEN_KERNEL)  # 8
SHARPEN_OFFSET = 0
DEFAULT_CONTRAST = 15  # 0-100 scale

# Alpha-aware edge enhancement
PUSH_THRESHOLD = 128
PUSH_STEP = 10

# Opaque colour blending: 3x3 gaussian approximation
SMOOTH_KERNEL = (
    (1, 2, 1),
    (2, 4, 2),
    (1, 2, 1),
)
SMOOTH_DIVISOR = sum(sum(row) for row in SMOOTH_KERNEL)  # 16
SMOOTH_OFFSET = 0
BLEND_KEEP = 0.6  # share of the enhanced image kept

# Alpha-aware colour blending
ALPHA_BLEND_KEEP = 0.7
