"""Geometry module for shape primitives and spatial acceleration.

This module provides geometric primitives and intersection algorithms:

Components:
    aabb: Axis-aligned bounding boxes and the slab test
    hittable: Hit records and the intersection protocol
    sphere: Stationary and linearly moving spheres
    rect: Axis-aligned rectangles (PlaneX, PlaneY, PlaneZ)
    box: Closed boxes made of six rectangles
    hittable_list: Composite list returning the closest hit
    transform: Translation and yaw rotation wrappers
    bvh: Bounding Volume Hierarchy for acceleration

Ray-object intersection follows the pattern:
    record = primitive.hit(ray, t_min, t_max)  # HitRecord or None
    box = primitive.bounding_box(time0, time1)  # AABB or None
"""

from .aabb import AABB, BoundingBoxError, surrounding_box
from .box import Box
from .bvh import BvhNode
from .hittable import Hittable, HitRecord
from .hittable_list import HittableList
from .rect import AxisAlignedRect, PlaneX, PlaneY, PlaneZ
from .sphere import MovingSphere, Sphere, hit_sphere, sphere_uv
from .transform import Translate, YawRotation

__all__ = [
    "AABB",
    "BoundingBoxError",
    "surrounding_box",
    "Hittable",
    "HitRecord",
    "Sphere",
    "MovingSphere",
    "hit_sphere",
    "sphere_uv",
    "AxisAlignedRect",
    "PlaneX",
    "PlaneY",
    "PlaneZ",
    "Box",
    "HittableList",
    "Translate",
    "YawRotation",
    "BvhNode",
]
