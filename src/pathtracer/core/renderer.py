"""Parallel render scheduler.

The image is split into horizontal bands of rows. Each band is rendered by
one task on a ThreadPoolExecutor and writes only to its own rows of the shared
pixel buffer, so no locking is needed. Every task gets its own
``random.Random``, seeded from a child of a ``numpy.random.SeedSequence``, so
no generator is ever shared between threads and a fixed seed reproduces the
same image regardless of the worker count.

Sample coordinates for pixel (row, col), with row 0 at the top:

    s = (col + xi) / (width - 1)
    t = (height - 1 - row + xi) / (height - 1)

The final pixel value is the per-channel square root of the sample mean
(gamma 2).

Example:
    >>> from pathtracer.core.renderer import Renderer, RenderSettings
    >>> from pathtracer.scene.examples import three_spheres_scene
    >>>
    >>> scene = three_spheres_scene(aspect_ratio=16 / 9)
    >>> settings = RenderSettings(width=400, height=225, samples_per_pixel=50)
    >>> image = Renderer(scene.camera, scene.world, settings).render()
    >>> image.shape
    (225, 400, 3)
"""

from __future__ import annotations

import logging
import math
import os
import random
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from pathtracer.core.integrator import MAX_DEPTH, Background, ConstantBackground, radiance
from pathtracer.core.progress import ProgressObserver
from pathtracer.core.vec3 import Color
from pathtracer.geometry.hittable import Hittable

if TYPE_CHECKING:
    from pathtracer.camera.thin_lens import Camera

logger = logging.getLogger(__name__)

# Rows rendered by one task
ROWS_PER_TASK = 1


@dataclass
class RenderSettings:
    """Configuration for a single render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Camera rays averaged per pixel.
        max_depth: Bounce budget for each camera ray.
        background: Radiance returned for rays that leave the scene.
        workers: Number of worker threads. Defaults to the CPU count.
        seed: Root seed for all sampling. None draws fresh OS entropy, making
            every render different.
        show_progress: Whether to draw a tqdm progress bar.
    """

    width: int = 400
    height: int = 225
    samples_per_pixel: int = 100
    max_depth: int = MAX_DEPTH
    background: Background = field(default_factory=ConstantBackground)
    workers: int | None = None
    seed: int | None = None
    show_progress: bool = True

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if self.samples_per_pixel <= 0:
            raise ValueError(
                f"samples_per_pixel must be positive, got {self.samples_per_pixel}"
            )
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.workers is None:
            self.workers = os.cpu_count() or 1
        if self.workers <= 0:
            raise ValueError(f"workers must be positive, got {self.workers}")


class Renderer:
    """Render a world through a camera into a linear float buffer.

    The camera and world are only read during rendering and may be shared
    between threads.

    Attributes:
        camera: Generates primary rays from normalized image coordinates.
        world: The scene root.
        settings: Image size, sampling and threading configuration.
    """

    def __init__(self, camera: Camera, world: Hittable, settings: RenderSettings) -> None:
        self.camera = camera
        self.world = world
        self.settings = settings
        # Denominators floored at 1 so one-pixel images stay finite
        self._s_scale = 1.0 / max(settings.width - 1, 1)
        self._t_scale = 1.0 / max(settings.height - 1, 1)

    def render_pixel(self, row: int, col: int, rng: random.Random) -> Color:
        """Estimate one pixel.

        Args:
            row: Pixel row, 0 at the top of the image.
            col: Pixel column, 0 at the left of the image.
            rng: Random generator owned by the calling worker.

        Returns:
            The gamma-2 corrected color: sqrt of the mean radiance per channel.
        """
        settings = self.settings
        flipped_row = settings.height - 1 - row
        r = g = b = 0.0
        for _ in range(settings.samples_per_pixel):
            s = (col + rng.random()) * self._s_scale
            t = (flipped_row + rng.random()) * self._t_scale
            ray = self.camera.get_ray(s, t, rng)
            sample = radiance(ray, self.world, settings.max_depth, settings.background, rng)
            r += sample[0]
            g += sample[1]
            b += sample[2]

        scale = 1.0 / settings.samples_per_pixel
        return Color(math.sqrt(r * scale), math.sqrt(g * scale), math.sqrt(b * scale))

    def render(self) -> npt.NDArray[np.float64]:
        """Render the full image.

        Returns:
            Array of shape (height, width, 3), row 0 at the top. Values are
            gamma corrected but not clamped.

        Raises:
            Exception: Any exception raised inside a worker is re-raised here.
        """
        settings = self.settings
        width, height = settings.width, settings.height
        image = np.zeros((height, width, 3), dtype=np.float64)

        bands = [
            (start, min(start + ROWS_PER_TASK, height))
            for start in range(0, height, ROWS_PER_TASK)
        ]
        seeds = np.random.SeedSequence(settings.seed).spawn(len(bands))

        logger.info(
            "Rendering %dx%d at %d spp (max depth %d) on %d workers",
            width,
            height,
            settings.samples_per_pixel,
            settings.max_depth,
            settings.workers,
        )
        started = time.perf_counter()

        with ProgressObserver(width * height, enabled=settings.show_progress) as progress:
            with ThreadPoolExecutor(max_workers=settings.workers) as executor:
                futures = [
                    executor.submit(self._render_band, image, band, seed, progress)
                    for band, seed in zip(bands, seeds)
                ]
                for future in futures:
                    future.result()

        logger.info("Finished render in %.2fs", time.perf_counter() - started)
        return image

    def _render_band(
        self,
        image: npt.NDArray[np.float64],
        band: tuple[int, int],
        seed: np.random.SeedSequence,
        progress: ProgressObserver,
    ) -> None:
        rng = random.Random(int(seed.generate_state(1, dtype=np.uint64)[0]))
        width = self.settings.width
        for row in range(*band):
            for col in range(width):
                image[row, col] = self.render_pixel(row, col, rng)
            progress.increase(width)

    def __repr__(self) -> str:
        s = self.settings
        return f"Renderer({s.width}x{s.height}, spp={s.samples_per_pixel}, depth={s.max_depth})"
