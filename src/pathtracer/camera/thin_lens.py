"""Thin-lens camera model for perspective projection with depth of field.

The camera supports:
- Look-at positioning (lookfrom, lookat, vup)
- Vertical field of view in degrees
- Arbitrary aspect ratios
- Depth of field through a circular aperture focused at ``focus_dist``
- A shutter interval [time0, time1] for motion blur

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

Rays are generated from normalized image coordinates:
    s in [0, 1]: left to right across the image
    t in [0, 1]: bottom to top across the image

Example:
    >>> import random
    >>> from pathtracer.camera.thin_lens import Camera
    >>> from pathtracer.core.vec3 import Vec3
    >>>
    >>> camera = Camera(
    ...     lookfrom=Vec3(0.0, 0.0, 3.0),
    ...     lookat=Vec3(0.0, 0.0, 0.0),
    ...     vup=Vec3(0.0, 1.0, 0.0),
    ...     vfov=60.0,
    ...     aspect_ratio=16.0 / 9.0,
    ... )
    >>> ray = camera.get_ray(0.5, 0.5, random.Random(0))  # Through the center
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field

from pathtracer.core.ray import Ray, random_in_unit_disk
from pathtracer.core.vec3 import Vec3


@dataclass
class Camera:
    """A thin-lens perspective camera.

    With ``aperture == 0`` every ray starts at ``lookfrom`` and the camera
    behaves like a pinhole.

    Attributes:
        lookfrom: Camera position in world space.
        lookat: Point the camera is looking at in world space.
        vup: Up direction vector for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees.
        aspect_ratio: Width divided by height of the output image.
        aperture: Lens diameter. 0 disables depth of field.
        focus_dist: Distance to the plane in perfect focus. Defaults to the
            distance between lookfrom and lookat.
        time0: Shutter open time.
        time1: Shutter close time.
    """

    lookfrom: Vec3
    lookat: Vec3
    vup: Vec3 = Vec3(0.0, 1.0, 0.0)
    vfov: float = 90.0
    aspect_ratio: float = 16.0 / 9.0
    aperture: float = 0.0
    focus_dist: float | None = None
    time0: float = 0.0
    time1: float = 0.0

    origin: Vec3 = field(init=False, repr=False)
    u: Vec3 = field(init=False, repr=False)
    v: Vec3 = field(init=False, repr=False)
    w: Vec3 = field(init=False, repr=False)
    horizontal: Vec3 = field(init=False, repr=False)
    vertical: Vec3 = field(init=False, repr=False)
    lower_left_corner: Vec3 = field(init=False, repr=False)
    lens_radius: float = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Compute the basis and viewport geometry.

        Raises:
            ValueError: If the field of view is outside (0, 180), the aspect
                ratio is not positive, or lookfrom equals lookat.
        """
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {self.vfov}")
        if self.aspect_ratio <= 0.0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")

        self.lookfrom = Vec3(*self.lookfrom)
        self.lookat = Vec3(*self.lookat)
        self.vup = Vec3(*self.vup)

        view = self.lookfrom - self.lookat
        if view.near_zero():
            raise ValueError("lookfrom and lookat must be distinct points")
        if self.focus_dist is None:
            self.focus_dist = view.length()

        # Viewport dimensions at unit distance
        h = math.tan(math.radians(self.vfov) / 2.0)
        viewport_height = 2.0 * h
        viewport_width = self.aspect_ratio * viewport_height

        self.w = view.unit()
        self.u = self.vup.cross(self.w).unit()
        self.v = self.w.cross(self.u)

        # The viewport sits on the focus plane so lens samples converge there
        self.origin = self.lookfrom
        self.horizontal = self.focus_dist * viewport_width * self.u
        self.vertical = self.focus_dist * viewport_height * self.v
        self.lower_left_corner = (
            self.origin - self.horizontal / 2.0 - self.vertical / 2.0 - self.focus_dist * self.w
        )
        self.lens_radius = self.aperture / 2.0

    def get_ray(self, s: float, t: float, rng: random.Random) -> Ray:
        """Generate a ray through normalized image coordinates.

        Args:
            s: Horizontal coordinate, 0 at the left edge and 1 at the right.
            t: Vertical coordinate, 0 at the bottom edge and 1 at the top.
            rng: Random generator used for lens and shutter sampling.

        Returns:
            A ray from a point on the lens toward the focus plane, stamped
            with a time drawn uniformly from [time0, time1].
        """
        origin = self.origin
        if self.lens_radius > 0.0:
            rd = self.lens_radius * random_in_unit_disk(rng)
            origin = origin + self.u * rd.x + self.v * rd.y

        target = self.lower_left_corner + s * self.horizontal + t * self.vertical
        if self.time1 > self.time0:
            time = rng.uniform(self.time0, self.time1)
        else:
            time = self.time0
        return Ray(origin, target - origin, time)
