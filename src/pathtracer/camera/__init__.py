"""Camera module for view and ray generation.

Components:
    thin_lens: Perspective camera with optional depth of field and a
        shutter interval for motion blur

Ray generation uses normalized image coordinates:
    s in [0, 1]: left to right across image
    t in [0, 1]: bottom to top across image
"""

from .thin_lens import Camera

__all__ = ["Camera"]
