"""Camera module for ray generation.

Components:
    pinhole: Pinhole (perspective) camera mapping pixels to world-space rays
"""

from .pinhole import Camera

__all__ = ["Camera"]
