"""
Test suite for PyFastScale package.

This test suite covers:
- Import tests for all modules and submodules
- Unit tests for the resampling, enhancement and blending kernels
- Integration tests for file and folder workflows

Run with: pytest
"""
