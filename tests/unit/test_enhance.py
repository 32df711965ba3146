"""Tests for the edge enhancement passes."""

import numpy as np
import pytest

from pyfastscale.enhance import contrast_factor, enhance_edges, enhance_edges_alpha


def _uniform(value, nx=4, ny=3, alpha=255):
    pixels = np.full((ny, nx, 4), value, dtype=np.uint8)
    pixels[..., 3] = alpha
    return pixels


def _bright_centre(centre, surround, alpha=255):
    pixels = np.zeros((3, 3, 4), dtype=np.uint8)
    pixels[..., :3] = surround
    pixels[1, 1, :3] = centre
    pixels[..., 3] = alpha
    return pixels


class TestOpaqueEnhancer:
    @pytest.mark.unit
    def test_contrast_factor(self):
        assert contrast_factor(0) == 1.0
        assert contrast_factor(15) == pytest.approx(1.3225)
        with pytest.raises(ValueError):
            contrast_factor(101)
        with pytest.raises(ValueError):
            contrast_factor(-1)

    @pytest.mark.unit
    def test_uniform_image_only_gets_contrast(self):
        """Sharpening a flat image is a no-op, the contrast boost is not."""
        np.testing.assert_array_equal(enhance_edges(_uniform(0)), _uniform(0))
        np.testing.assert_array_equal(enhance_edges(_uniform(255)), _uniform(255))
        assert np.all(enhance_edges(_uniform(200))[..., :3] == 223)
        assert np.all(enhance_edges(_uniform(50))[..., :3] == 25)
        np.testing.assert_array_equal(
            enhance_edges(_uniform(77), contrast=0), _uniform(77)
        )

    @pytest.mark.unit
    def test_sharpen_with_edge_replication(self):
        pixels = _bright_centre(200, 50)
        result = enhance_edges(pixels, contrast=0)
        # (16 * 200 - 8 * 50) / 8 saturates
        assert np.all(result[1, 1, :3] == 255)
        # corner sees itself four times through the replicated border
        assert np.all(result[0, 0, :3] == 31)

    @pytest.mark.unit
    def test_alpha_carried_through(self, noisy_rgba):
        result = enhance_edges(noisy_rgba)
        np.testing.assert_array_equal(result[..., 3], noisy_rgba[..., 3])
        assert result.dtype == np.uint8
        assert result.shape == noisy_rgba.shape


class TestAlphaEnhancer:
    @pytest.mark.unit
    def test_bright_pixel_among_dark_neighbours(self):
        """Bright channels go up by 10, dark ones down by 10, alpha untouched."""
        pixels = _bright_centre([200, 180, 190], [50, 60, 70], alpha=200)
        result = enhance_edges_alpha(pixels)

        np.testing.assert_array_equal(result[1, 1, :3], [210, 190, 200])
        dark = np.ones((3, 3), dtype=bool)
        dark[1, 1] = False
        assert np.all(result[dark][:, :3] == [40, 50, 60])
        assert np.all(result[..., 3] == 200)

    @pytest.mark.unit
    def test_saturation(self):
        pixels = _bright_centre([250, 255, 249], [5, 0, 9])
        result = enhance_edges_alpha(pixels)
        np.testing.assert_array_equal(result[1, 1, :3], [255, 255, 255])
        np.testing.assert_array_equal(result[0, 0, :3], [0, 0, 0])

    @pytest.mark.unit
    def test_threshold_is_strict(self):
        """An intensity of exactly 128 counts as dark."""
        result = enhance_edges_alpha(_uniform(128, nx=1, ny=1))
        np.testing.assert_array_equal(result[0, 0], [118, 118, 118, 255])

    @pytest.mark.unit
    def test_all_transparent_is_unchanged(self, transparent_rgba):
        result = enhance_edges_alpha(transparent_rgba.pixels)
        np.testing.assert_array_equal(result, transparent_rgba.pixels)

    @pytest.mark.unit
    def test_alpha_preserved_and_transparent_isolated(self, noisy_rgba):
        result = enhance_edges_alpha(noisy_rgba)
        np.testing.assert_array_equal(result[..., 3], noisy_rgba[..., 3])
        hidden = noisy_rgba[..., 3] == 0
        np.testing.assert_array_equal(result[hidden], noisy_rgba[hidden])
