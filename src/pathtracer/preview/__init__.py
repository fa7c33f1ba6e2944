"""Preview module for writing rendered images.

Components:
    export: 8-bit quantisation, PNG and PPM writers, image comparison
"""

from .export import (
    ColorRangeError,
    color_to_rgb8,
    compute_rmse,
    image_to_uint8,
    save_png,
    save_ppm,
)

__all__ = [
    "ColorRangeError",
    "color_to_rgb8",
    "image_to_uint8",
    "save_png",
    "save_ppm",
    "compute_rmse",
]
