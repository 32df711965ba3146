"""
Integration tests for basic PyFastScale workflows.

These tests verify that decode, upscaling, encode and the folder
workflows work together on real image files.
"""
import numpy as np
import pytest
from PIL import Image


class TestSingleImageWorkflow:
    """Decode -> upscale -> encode for each format family."""

    @pytest.mark.integration
    def test_jpeg_workflow(self, image_folder, tmp_path):
        import pyfastscale as pf

        upscaler = pf.pipeline.Upscaler()
        out = upscaler.upscale_file(image_folder / "photo.jpg", tmp_path / "photo.jpg")

        result = pf.io.load_raster(out)
        assert result.fmt is pf.raster.SourceFormat.RGB
        assert (result.nx, result.ny) == (32, 24)
        assert np.all(result.alpha == 255)

    @pytest.mark.integration
    def test_transparent_gif_workflow(self, tmp_path):
        import pyfastscale as pf

        image = Image.new("P", (4, 4), 0)
        image.putpalette([250, 250, 250, 10, 10, 10, 0, 0, 0] + [0] * (253 * 3))
        for x in range(4):
            image.putpixel((x, 0), 2)
        image.putpixel((2, 2), 1)
        source = tmp_path / "sprite.gif"
        image.save(source, format="GIF", transparency=2)

        upscaler = pf.pipeline.Upscaler(pf.pipeline.UpscaleConfig(scale_factor=2))
        out = upscaler.upscale_file(source, tmp_path / "big.gif")

        result = pf.io.load_raster(out)
        assert result.fmt is pf.raster.SourceFormat.PALETTE
        assert (result.nx, result.ny) == (8, 8)
        # the transparent top row stays transparent, the rest stays opaque
        assert np.all(result.alpha[:2] == 0)
        assert np.all(result.alpha[2:] == 255)

    @pytest.mark.integration
    def test_scenario_pipeline_matches_stage_functions(self, noisy_rgba):
        """The orchestrator equals resample -> enhance -> blend run by hand."""
        import pyfastscale as pf

        raster = pf.raster.Raster(pixels=noisy_rgba, fmt=pf.raster.SourceFormat.RGBA)
        upscaler = pf.pipeline.Upscaler(pf.pipeline.UpscaleConfig(scale_factor=3))
        result = upscaler.process_raster(raster)

        manual = pf.rastermanip.upscale_raster(noisy_rgba, factor=3)
        manual = pf.enhance.enhance_edges_alpha(manual)
        manual = pf.blend.blend_colors_alpha(manual)
        np.testing.assert_array_equal(result.pixels, manual)


class TestFolderWorkflow:
    @pytest.mark.integration
    @pytest.mark.slow
    def test_batch_then_monitor(self, image_folder, tmp_path):
        import pyfastscale as pf

        config = pf.pipeline.UpscaleConfig(
            input_folder=image_folder,
            output_folder=tmp_path / "out",
            scale_factor=2,
        )
        upscaler = pf.pipeline.Upscaler(config)

        summary = pf.watch.process_folder(upscaler, image_folder, config.output_folder)
        assert summary["processed"] == 3

        monitor = pf.watch.FolderMonitor(upscaler, sleep=lambda _: None)
        monitor.run(max_cycles=1)
        Image.fromarray(np.zeros((2, 2, 3), dtype=np.uint8)).save(image_folder / "late.png")
        new = monitor.scan_once()

        assert [r.file for r in new] == ["late.png"]
        assert (config.output_folder / "upscaled_late.png").is_file()
