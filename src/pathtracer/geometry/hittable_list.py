"""Ordered collection of primitives intersected as one object."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pathtracer.core.ray import Ray
from pathtracer.geometry.aabb import AABB
from pathtracer.geometry.hittable import Hittable, HitRecord


class HittableList(Hittable):
    """A composite primitive returning the closest hit among its children.

    Every child is tested; the upper bound of the valid interval shrinks to
    the closest hit found so far, so later children can only replace it with
    a strictly closer hit.

    Attributes:
        objects: The child primitives, in insertion order.
    """

    def __init__(self, objects: Iterable[Hittable] = ()) -> None:
        self.objects: list[Hittable] = list(objects)

    def append(self, obj: Hittable) -> None:
        self.objects.append(obj)

    def extend(self, objects: Iterable[Hittable]) -> None:
        self.objects.extend(objects)

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        closest = t_max
        result = None
        for obj in self.objects:
            rec = obj.hit(ray, t_min, closest)
            if rec is not None:
                closest = rec.t
                result = rec
        return result

    def bounding_box(self, time0: float, time1: float) -> AABB | None:
        """Return the union of all child boxes.

        Returns:
            None if the list is empty or any child has no bounding box.
        """
        result = None
        for obj in self.objects:
            box = obj.bounding_box(time0, time1)
            if box is None:
                return None
            result = box if result is None else AABB.union(result, box)
        return result

    def __repr__(self) -> str:
        return f"HittableList({len(self.objects)} objects)"
