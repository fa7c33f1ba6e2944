"""Bounding volume hierarchy over scene primitives.

The BVH is a binary tree whose internal nodes store the union of their
children's bounding boxes. A ray that misses a node's box cannot hit anything
underneath it, so whole subtrees are pruned with a single slab test.

Construction recursively partitions the primitives:
1. Pick a random axis (x, y or z)
2. One primitive: both children alias the same leaf
3. Two primitives: order them by bounding-box minimum on the axis
4. Otherwise: sort by bounding-box minimum on the axis and split at the
   midpoint index, recursing on both halves

Boxes are computed over the shutter interval [time0, time1] so moving
primitives are enclosed along their whole path.

Example:
    >>> import random
    >>> from pathtracer.geometry.bvh import BvhNode
    >>> root = BvhNode.build(primitives, 0.0, 1.0, rng=random.Random(1))
    >>> rec = root.hit(ray, 0.001, float("inf"))
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from pathtracer.core.ray import Ray
from pathtracer.geometry.aabb import AABB, BoundingBoxError
from pathtracer.geometry.hittable import Hittable, HitRecord

logger = logging.getLogger(__name__)


def _box_of(obj: Hittable, time0: float, time1: float) -> AABB:
    box = obj.bounding_box(time0, time1)
    if box is None:
        raise BoundingBoxError(
            f"No bounding box for {obj!r} over [{time0}, {time1}]; "
            "it cannot be placed in a BVH"
        )
    return box


class BvhNode(Hittable):
    """An internal BVH node owning two children and their enclosing box.

    Nodes are immutable after construction and can be shared by any number
    of rendering threads.

    Attributes:
        left: The first child (a primitive or another BvhNode).
        right: The second child. Aliases ``left`` for single-primitive leaves.
        box: The union of both children's bounding boxes.
    """

    __slots__ = ("left", "right", "box")

    def __init__(self, left: Hittable, right: Hittable, box: AABB) -> None:
        self.left = left
        self.right = right
        self.box = box

    @classmethod
    def build(
        cls,
        objects: Sequence[Hittable],
        time0: float = 0.0,
        time1: float = 0.0,
        rng: random.Random | None = None,
    ) -> BvhNode:
        """Build a BVH over the given primitives.

        The input sequence is not modified.

        Args:
            objects: The primitives to partition.
            time0: Start of the shutter interval.
            time1: End of the shutter interval.
            rng: Random generator used to pick split axes. A fresh unseeded
                generator is used when omitted.

        Returns:
            The root node.

        Raises:
            ValueError: If ``objects`` is empty.
            BoundingBoxError: If any primitive has no bounding box over the
                interval.
        """
        if not objects:
            raise ValueError("Cannot build a BVH over an empty list of primitives")
        if rng is None:
            rng = random.Random()

        # Resolve every box up front so the error names the offending primitive
        entries = [(obj, _box_of(obj, time0, time1)) for obj in objects]
        root = cls._construct(entries, rng)
        logger.debug("Built BVH over %d primitives (depth %d)", len(objects), root.depth())
        return root

    @classmethod
    def _construct(
        cls,
        entries: list[tuple[Hittable, AABB]],
        rng: random.Random,
    ) -> BvhNode:
        axis = rng.randrange(3)
        span = len(entries)

        if span == 1:
            obj, box = entries[0]
            return cls(obj, obj, box)

        if span == 2:
            (a, box_a), (b, box_b) = entries
            if box_a.minimum[axis] <= box_b.minimum[axis]:
                return cls(a, b, AABB.union(box_a, box_b))
            return cls(b, a, AABB.union(box_b, box_a))

        ordered = sorted(entries, key=lambda entry: entry[1].minimum[axis])
        mid = span // 2
        left = cls._construct(ordered[:mid], rng)
        right = cls._construct(ordered[mid:], rng)
        return cls(left, right, AABB.union(left.box, right.box))

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        if self.box.hit(ray, t_min, t_max) is None:
            return None

        left_rec = self.left.hit(ray, t_min, t_max)
        if left_rec is not None:
            if self.right is self.left:
                return left_rec
            right_rec = self.right.hit(ray, t_min, left_rec.t)
            return right_rec if right_rec is not None else left_rec
        if self.right is self.left:
            return None
        return self.right.hit(ray, t_min, t_max)

    def bounding_box(self, time0: float, time1: float) -> AABB | None:
        return self.box

    def depth(self) -> int:
        """Return the height of the tree rooted at this node."""
        child_depths = [
            child.depth() for child in (self.left, self.right) if isinstance(child, BvhNode)
        ]
        return 1 + max(child_depths, default=0)

    def __repr__(self) -> str:
        return f"BvhNode(box={self.box!r})"
