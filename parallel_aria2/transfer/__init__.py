"""
Transfer Layer.

This package hands the generated manifest to aria2c, which performs the
parallel, resumable download.
"""

from .aria2 import DEFAULT_ARIA2_OPTIONS, Aria2Transfer

__all__ = ["DEFAULT_ARIA2_OPTIONS", "Aria2Transfer"]
