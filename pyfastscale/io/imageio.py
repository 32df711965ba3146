"""
Image decode/encode boundary for PyFastScale.

Decoding turns a JPEG, PNG or GIF file into a Raster with 8-bit RGBA pixels
(0 = transparent, 255 = opaque). Palette tables, including GIF/PNG
transparency indices, are kept on the raster so the transparency classifier
can inspect them without scanning the image.

Encoding writes the raster back in its source format family:
- RGB     -> JPEG (quality 95 by default)
- RGBA    -> PNG (compression level 9 by default), alpha kept
- PALETTE -> GIF, with one reserved palette index for transparent pixels
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..errors import DecodeFailure, UnsupportedFormat
from ..raster import Raster, SourceFormat

_SAVE_FORMATS = {
    SourceFormat.RGB: "JPEG",
    SourceFormat.RGBA: "PNG",
    SourceFormat.PALETTE: "GIF",
}

# Index reserved for transparent pixels in GIF output
_GIF_TRANSPARENT_INDEX = 255


def is_supported_image(filename, image_types=("jpg", "jpeg", "png", "gif")):
    """Check the extension of ``filename`` against ``image_types``."""
    extension = Path(filename).suffix.lower().lstrip(".")
    return extension in {ext.lower().lstrip(".") for ext in image_types}


def extract_palette(image):
    """
    Return the RGBA palette table of a palette-mode image, or None.

    The ``transparency`` info entry is either a single transparent index
    (GIF) or a bytes object with one alpha value per entry (PNG).
    """
    if image.mode not in ("P", "PA"):
        return None
    rgb = image.getpalette()
    if not rgb:
        return None
    entries = np.asarray(rgb, dtype=np.uint8).reshape(-1, 3)
    alpha = np.full((len(entries), 1), 255, dtype=np.uint8)

    transparency = image.info.get("transparency")
    if isinstance(transparency, int):
        if 0 <= transparency < len(entries):
            alpha[transparency, 0] = 0
    elif isinstance(transparency, (bytes, bytearray)):
        values = np.frombuffer(bytes(transparency), dtype=np.uint8)[: len(entries)]
        alpha[: len(values), 0] = values
    return np.concatenate([entries, alpha], axis=1)


def decode_image(image, path=None):
    """
    Convert an opened Pillow image into a Raster.

    Raises:
        UnsupportedFormat: If the image is not JPEG, PNG or GIF
        DecodeFailure: If the pixel data cannot be read
    """
    fmt = SourceFormat.from_pil_format(image.format)
    palette = extract_palette(image) if fmt is SourceFormat.PALETTE else None
    try:
        rgba = np.asarray(image.convert("RGBA"), dtype=np.uint8)
    except (OSError, ValueError) as e:
        raise DecodeFailure(f"Failed to decode image data from: {path}") from e
    return Raster(pixels=rgba.copy(), fmt=fmt, palette=palette, path=Path(path) if path else None)


def load_raster(path):
    """
    Open and decode an image file.

    Args:
        path: Path to a JPEG, PNG or GIF file

    Returns:
        Raster

    Raises:
        FileNotFoundError: If the file does not exist
        UnsupportedFormat: If the file is an image of another type
        DecodeFailure: If the file cannot be decoded at all
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Input file does not exist: {path}")
    try:
        with Image.open(path) as image:
            return decode_image(image, path)
    except UnidentifiedImageError as e:
        raise DecodeFailure(f"Failed to create image resource from: {path}") from e
    except Image.DecompressionBombError as e:
        raise DecodeFailure(f"Image too large to decode: {path}: {e}") from e
    except (UnsupportedFormat, DecodeFailure):
        raise
    except (OSError, SyntaxError, ValueError) as e:
        raise DecodeFailure(f"Failed to create image resource from: {path}: {e}") from e


def _to_gif_image(pixels, transparent):
    image = Image.fromarray(np.ascontiguousarray(pixels[..., :3]))
    if not transparent:
        return image.quantize(colors=256)

    # Keep the last palette slot free for fully transparent pixels
    paletted = image.quantize(colors=_GIF_TRANSPARENT_INDEX)
    mask = Image.fromarray(np.where(pixels[..., 3] == 0, 255, 0).astype(np.uint8))
    paletted.paste(_GIF_TRANSPARENT_INDEX, mask=mask)
    palette = (paletted.getpalette() or [])[: _GIF_TRANSPARENT_INDEX * 3]
    palette += [0] * (256 * 3 - len(palette))
    paletted.putpalette(palette)
    paletted.info["transparency"] = _GIF_TRANSPARENT_INDEX
    return paletted


def encode_image(raster, transparent=None):
    """
    Build the Pillow image that will be written for ``raster``.

    Args:
        raster: Raster to encode
        transparent: Whether alpha must survive (default: inferred from the
                     format, palette rasters use their alpha values)
    """
    pixels = raster.pixels
    if raster.fmt is SourceFormat.RGB:
        return Image.fromarray(np.ascontiguousarray(pixels[..., :3]))
    if raster.fmt is SourceFormat.RGBA:
        return Image.fromarray(pixels)
    if raster.fmt is SourceFormat.PALETTE:
        if transparent is None:
            transparent = bool(np.any(pixels[..., 3] == 0))
        return _to_gif_image(pixels, transparent)
    raise UnsupportedFormat(f"Unsupported format tag: {raster.fmt!r}")


def save_raster(
    raster,
    path,
    jpeg_quality=95,
    png_compress_level=9,
    transparent=None,
):
    """
    Encode ``raster`` in its source format family and write it to ``path``.

    Args:
        raster: Raster to write
        path: Destination file; parent folders are created
        jpeg_quality: JPEG quality for RGB rasters
        png_compress_level: zlib level for RGBA rasters
        transparent: Keep a transparent GIF index (palette rasters only)

    Returns:
        Path: The written path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    image = encode_image(raster, transparent=transparent)
    save_format = _SAVE_FORMATS[raster.fmt]

    if save_format == "JPEG":
        image.save(path, format="JPEG", quality=jpeg_quality)
    elif save_format == "PNG":
        image.save(path, format="PNG", compress_level=png_compress_level)
    elif "transparency" in image.info:
        image.save(
            path,
            format="GIF",
            transparency=image.info["transparency"],
            optimize=False,
        )
    else:
        image.save(path, format="GIF", optimize=False)
    return path
