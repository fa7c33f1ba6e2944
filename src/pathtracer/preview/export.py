"""Image export utilities for rendered images.

The renderer produces a linear float buffer of shape (H, W, 3), already gamma
corrected (square root of the mean radiance). This module quantises that
buffer to 8 bits and writes it to disk.

Supported formats:
    - PNG (8-bit sRGB via Pillow)
    - PPM (plain-text P3, one pixel per line)

Example:
    >>> from pathtracer.core.renderer import Renderer, RenderSettings
    >>> from pathtracer.preview.export import save_png
    >>>
    >>> image = Renderer(camera, world, RenderSettings(width=200, height=200)).render()
    >>> save_png(image, "output.png")
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

# Scale used to map [0, 1] onto [0, 255] so that 1.0 still lands on 255
QUANTIZE_SCALE = 255.999


class ColorRangeError(ValueError):
    """Raised when a color component is outside [0, 1]."""


def color_to_rgb8(color: Sequence[float]) -> tuple[int, int, int]:
    """Quantise one color to 8-bit channels.

    Args:
        color: An (R, G, B) color with components in [0, 1].

    Returns:
        The (R, G, B) channels as integers in [0, 255].

    Raises:
        ColorRangeError: If any component is outside [0, 1] or not finite.
    """
    channels = []
    for component in color:
        if not 0.0 <= component <= 1.0:
            raise ColorRangeError(f"Color component {component} is outside [0, 1]")
        channels.append(int(QUANTIZE_SCALE * component))
    r, g, b = channels
    return r, g, b


def image_to_uint8(
    image: npt.NDArray[np.floating],
    *,
    clamp: bool = True,
) -> npt.NDArray[np.uint8]:
    """Convert a float image to uint8 for display/export.

    Args:
        image: Image array of shape (H, W, 3).
        clamp: Clamp values into [0, 1] before quantising. When False, values
            outside the range raise instead.

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.

    Raises:
        ColorRangeError: If ``clamp`` is False and a value is outside [0, 1].
    """
    image = np.asarray(image, dtype=np.float64)
    if clamp:
        image = np.clip(np.nan_to_num(image, nan=0.0), 0.0, 1.0)
    elif not np.all((image >= 0.0) & (image <= 1.0)):
        raise ColorRangeError("Image contains values outside [0, 1]")
    return (image * QUANTIZE_SCALE).astype(np.uint8)


def save_png(
    image: npt.NDArray[np.floating],
    filepath: str | Path,
    *,
    clamp: bool = True,
) -> None:
    """Save a rendered buffer as an 8-bit PNG file.

    Args:
        image: Image array of shape (H, W, 3), row 0 at the top.
        filepath: Output file path (should end in .png).
        clamp: Passed to image_to_uint8.
    """
    image_uint8 = image_to_uint8(image, clamp=clamp)
    pil_image = PILImage.fromarray(image_uint8, mode="RGB")
    pil_image.save(filepath)


def save_ppm(
    image: npt.NDArray[np.floating],
    filepath: str | Path,
    *,
    clamp: bool = True,
) -> None:
    """Save a rendered buffer as a plain-text PPM (P3) file.

    The header is ``P3``, the dimensions and the maximum value 255, each on
    its own line, followed by one ``r g b`` line per pixel in row-major order.

    Args:
        image: Image array of shape (H, W, 3), row 0 at the top.
        filepath: Output file path (should end in .ppm).
        clamp: Passed to image_to_uint8.
    """
    image_uint8 = image_to_uint8(image, clamp=clamp)
    height, width = image_uint8.shape[:2]
    with open(filepath, "w", encoding="ascii") as f:
        f.write(f"P3\n{width} {height}\n255\n")
        for r, g, b in image_uint8.reshape(-1, 3):
            f.write(f"{r} {g} {b}\n")


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Root mean squared difference between two renders of the same size.

    Used to compare a noisy render against a converged reference.

    Raises:
        ValueError: If the shapes differ.
    """
    a = np.asarray(image_a, dtype=np.float64)
    b = np.asarray(image_b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"Cannot compare images of shape {a.shape} and {b.shape}")
    return float(np.sqrt(np.mean(np.square(a - b))))
