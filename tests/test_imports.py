"""
Import tests for all PyFastScale modules and submodules.

These tests ensure that all modules can be imported without errors,
which is crucial for detecting import-related issues early.

Tests are marked with @pytest.mark.importtest for selective running.
"""
import pytest


class TestMainPackageImports:
    """Test imports for the main pyfastscale package."""

    @pytest.mark.importtest
    def test_main_package_import(self):
        """Test that the main pyfastscale package can be imported."""
        import pyfastscale
        assert hasattr(pyfastscale, '__version__')
        assert callable(pyfastscale.init_backend)

    @pytest.mark.importtest
    def test_lazy_submodules(self):
        """Submodules resolve on attribute access."""
        import pyfastscale
        for name in ("raster", "rastermanip", "enhance", "blend", "pipeline", "io", "watch"):
            assert getattr(pyfastscale, name) is not None
        with pytest.raises(AttributeError):
            pyfastscale.not_a_module

    @pytest.mark.importtest
    def test_constants_import(self):
        """Test that constants module can be imported."""
        import pyfastscale.constants
        assert pyfastscale.constants.SHARPEN_DIVISOR == 8
        assert pyfastscale.constants.SMOOTH_DIVISOR == 16

    @pytest.mark.importtest
    def test_errors_hierarchy(self):
        from pyfastscale.errors import (
            AllocationFailure,
            DecodeFailure,
            UnsupportedFormat,
            UpscaleError,
        )
        for exc in (AllocationFailure, DecodeFailure, UnsupportedFormat):
            assert issubclass(exc, UpscaleError)
        assert issubclass(UpscaleError, RuntimeError)


class TestKernelModuleImports:
    """Test imports for the Taichi kernel modules."""

    @pytest.mark.importtest
    def test_rastermanip_import(self):
        import pyfastscale.rastermanip
        assert hasattr(pyfastscale.rastermanip, 'upscale_raster')
        assert hasattr(pyfastscale.rastermanip, 'area_resample_kernel')

    @pytest.mark.importtest
    def test_enhance_import(self):
        import pyfastscale.enhance
        assert hasattr(pyfastscale.enhance, 'enhance_edges')
        assert hasattr(pyfastscale.enhance, 'enhance_edges_alpha')

    @pytest.mark.importtest
    def test_blend_import(self):
        import pyfastscale.blend
        assert hasattr(pyfastscale.blend, 'blend_colors')
        assert hasattr(pyfastscale.blend, 'blend_colors_alpha')

    @pytest.mark.importtest
    def test_pool_import(self):
        import pyfastscale.pool
        assert hasattr(pyfastscale.pool, 'taipool')


class TestCLIImports:
    """Test imports for CLI modules."""

    @pytest.mark.importtest
    def test_cli_init_import(self):
        """Test CLI package import."""
        import pyfastscale.cli
        assert pyfastscale.cli is not None

    @pytest.mark.importtest
    def test_cli_lazy_commands(self):
        import pyfastscale.cli
        for name in ("upscale", "watch", "batch", "compare"):
            assert callable(getattr(pyfastscale.cli, name))

    @pytest.mark.importtest
    def test_cli_upscale_commands_import(self):
        import pyfastscale.cli.upscale_commands
        assert hasattr(pyfastscale.cli.upscale_commands, 'upscale')
