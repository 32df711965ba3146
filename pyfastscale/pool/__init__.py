"""
Memory pool for Taichi fields.

Every pipeline stage that needs a scratch buffer checks one out of the shared
pool and releases it before returning.
"""

from .pool import TaiPool, TPField, get_temp_field, taipool

__all__ = ["TaiPool", "TPField", "get_temp_field", "taipool"]
