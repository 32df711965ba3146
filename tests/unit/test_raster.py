"""Tests for the Raster container and the transparency classifier."""

import numpy as np
import pytest

from pyfastscale.errors import UnsupportedFormat
from pyfastscale.raster import Raster, SourceFormat, has_transparency


def _palette(alphas):
    entries = np.zeros((len(alphas), 4), dtype=np.uint8)
    entries[:, 0] = np.arange(len(alphas))
    entries[:, 3] = alphas
    return entries


class TestRaster:
    @pytest.mark.unit
    def test_dimensions(self, noisy_rgba):
        raster = Raster(pixels=noisy_rgba)
        assert (raster.nx, raster.ny) == (6, 5)
        assert raster.fmt is SourceFormat.RGBA
        np.testing.assert_array_equal(raster.alpha, noisy_rgba[..., 3])

    @pytest.mark.unit
    def test_from_rgb_is_opaque(self):
        raster = Raster.from_rgb(np.zeros((2, 3, 3), dtype=np.uint8))
        assert raster.pixels.shape == (2, 3, 4)
        assert raster.fmt is SourceFormat.RGB
        assert np.all(raster.alpha == 255)

    @pytest.mark.unit
    def test_with_pixels_keeps_metadata(self, tmp_path):
        palette = _palette([255, 0])
        raster = Raster(
            pixels=np.zeros((1, 1, 4), dtype=np.uint8),
            fmt=SourceFormat.PALETTE,
            palette=palette,
            path=tmp_path / "a.gif",
        )
        bigger = raster.with_pixels(np.zeros((4, 4, 4), dtype=np.uint8))
        assert bigger.fmt is SourceFormat.PALETTE
        assert bigger.path == tmp_path / "a.gif"
        np.testing.assert_array_equal(bigger.palette, palette)

    @pytest.mark.unit
    def test_invalid_pixels(self):
        with pytest.raises(ValueError):
            Raster(pixels=np.zeros((2, 2, 3), dtype=np.uint8))
        with pytest.raises(ValueError):
            Raster(pixels=np.zeros((0, 2, 4), dtype=np.uint8))
        with pytest.raises(ValueError):
            Raster(pixels=np.full((1, 1, 4), 300))
        with pytest.raises(ValueError, match="integer"):
            Raster(pixels=np.full((1, 1, 4), 12.7))

    @pytest.mark.unit
    def test_wider_integer_dtype_is_accepted(self):
        raster = Raster(pixels=np.full((1, 2, 4), 200, dtype=np.int32))
        assert raster.pixels.dtype == np.uint8
        assert np.all(raster.pixels == 200)
        with pytest.raises(UnsupportedFormat):
            Raster(pixels=np.zeros((1, 1, 4), dtype=np.uint8), fmt="bmp")

    @pytest.mark.unit
    def test_pil_format_mapping(self):
        assert SourceFormat.from_pil_format("JPEG") is SourceFormat.RGB
        assert SourceFormat.from_pil_format("PNG") is SourceFormat.RGBA
        assert SourceFormat.from_pil_format("GIF") is SourceFormat.PALETTE
        with pytest.raises(UnsupportedFormat):
            SourceFormat.from_pil_format("BMP")


class TestClassifier:
    @pytest.mark.unit
    def test_rgba_always_transparent(self):
        opaque = Raster(pixels=np.full((2, 2, 4), 255, dtype=np.uint8), fmt=SourceFormat.RGBA)
        assert has_transparency(opaque) is True

    @pytest.mark.unit
    def test_rgb_never_transparent(self, two_by_two_rgb):
        assert has_transparency(two_by_two_rgb) is False

    @pytest.mark.unit
    def test_fully_opaque_palette(self):
        """No non-opaque palette entry selects the opaque branch."""
        raster = Raster(
            pixels=np.full((2, 2, 4), 255, dtype=np.uint8),
            fmt=SourceFormat.PALETTE,
            palette=_palette([255, 255, 255]),
        )
        assert has_transparency(raster) is False

    @pytest.mark.unit
    def test_palette_inspects_entries_not_pixels(self):
        """An unused transparent palette entry still counts."""
        raster = Raster(
            pixels=np.full((2, 2, 4), 255, dtype=np.uint8),
            fmt=SourceFormat.PALETTE,
            palette=_palette([255, 255, 0]),
        )
        assert has_transparency(raster) is True

    @pytest.mark.unit
    def test_palette_without_table_uses_pixels(self):
        pixels = np.full((2, 2, 4), 255, dtype=np.uint8)
        raster = Raster(pixels=pixels, fmt=SourceFormat.PALETTE)
        assert has_transparency(raster) is False
        pixels[0, 0, 3] = 0
        assert has_transparency(Raster(pixels=pixels, fmt=SourceFormat.PALETTE)) is True

    @pytest.mark.unit
    def test_idempotent(self, noisy_rgba):
        raster = Raster(pixels=noisy_rgba, fmt=SourceFormat.PALETTE)
        first = has_transparency(raster)
        assert all(has_transparency(raster) == first for _ in range(3))
        np.testing.assert_array_equal(raster.pixels, noisy_rgba)

    @pytest.mark.unit
    def test_unknown_tag(self, two_by_two_rgb):
        two_by_two_rgb.fmt = "tiff"
        with pytest.raises(UnsupportedFormat):
            has_transparency(two_by_two_rgb)
