"""
Ready-made type converters.
"""

from . import mongodb as MongoDB

__all__ = ["MongoDB"]
