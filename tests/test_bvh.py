"""Unit tests for the bounding volume hierarchy.

Tests cover:
- Construction errors (empty input, unbounded primitives)
- Leaf aliasing and ordering of two-element nodes
- Node boxes enclose their children
- Traversal agrees with brute-force intersection
- Input sequence is not mutated
"""

import math
import random

import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Vec3
from pathtracer.geometry.aabb import BoundingBoxError
from pathtracer.geometry.bvh import BvhNode
from pathtracer.geometry.hittable import Hittable
from pathtracer.geometry.hittable_list import HittableList
from pathtracer.geometry.rect import PlaneY
from pathtracer.geometry.sphere import MovingSphere, Sphere


class Unbounded(Hittable):
    """A primitive with no finite extent."""

    def hit(self, ray, t_min, t_max):
        return None

    def bounding_box(self, time0, time1):
        return None


def random_spheres(material, count, seed):
    rng = random.Random(seed)
    return [
        Sphere(
            Vec3(rng.uniform(-10, 10), rng.uniform(-10, 10), rng.uniform(-10, 10)),
            rng.uniform(0.2, 1.5),
            material,
        )
        for _ in range(count)
    ]


class TestConstruction:
    """Tests for BvhNode.build."""

    def test_empty_raises_value_error(self):
        """An empty primitive list is rejected."""
        with pytest.raises(ValueError):
            BvhNode.build([])

    def test_unbounded_raises_bounding_box_error(self, gray):
        """A primitive without a box cannot be placed in the tree."""
        with pytest.raises(BoundingBoxError):
            BvhNode.build([Sphere(Vec3(0, 0, 0), 1.0, gray), Unbounded()])

    def test_single_leaf_aliases(self, gray):
        """A single primitive becomes both children of the root."""
        sphere = Sphere(Vec3(0, 0, 0), 1.0, gray)
        root = BvhNode.build([sphere], rng=random.Random(0))
        assert root.left is sphere
        assert root.right is sphere
        assert root.box == sphere.bounding_box(0.0, 0.0)

    def test_two_elements_are_ordered(self, gray):
        """With two primitives the smaller box minimum goes left on every axis."""
        a = Sphere(Vec3(-5, -5, -5), 1.0, gray)
        b = Sphere(Vec3(5, 5, 5), 1.0, gray)
        for seed in range(10):
            root = BvhNode.build([b, a], rng=random.Random(seed))
            assert root.left is a
            assert root.right is b

    def test_input_not_mutated(self, gray):
        """Building the tree leaves the caller's list untouched."""
        spheres = random_spheres(gray, 20, seed=3)
        snapshot = list(spheres)
        BvhNode.build(spheres, rng=random.Random(1))
        assert spheres == snapshot

    def test_node_boxes_enclose_children(self, gray):
        """Every node box contains the boxes of its children."""
        root = BvhNode.build(random_spheres(gray, 50, seed=4), rng=random.Random(2))
        stack = [root]
        while stack:
            node = stack.pop()
            for child in (node.left, node.right):
                child_box = child.bounding_box(0.0, 0.0)
                assert node.box.contains(child_box.minimum)
                assert node.box.contains(child_box.maximum)
                if isinstance(child, BvhNode):
                    stack.append(child)

    def test_depth_is_logarithmic(self, gray):
        """Median splits keep the tree balanced."""
        root = BvhNode.build(random_spheres(gray, 64, seed=5), rng=random.Random(3))
        assert root.depth() == 6

    def test_moving_primitives_use_interval(self, gray):
        """Boxes are taken over the requested shutter interval."""
        moving = MovingSphere(Vec3(0, 0, 0), Vec3(0, 10, 0), 0.0, 1.0, 1.0, gray)
        root = BvhNode.build([moving], 0.0, 1.0, rng=random.Random(0))
        assert root.box.maximum.y == pytest.approx(11.0)

    def test_flat_primitives_are_accepted(self, gray):
        """Rectangles have padded boxes and can be placed in the tree."""
        floor = PlaneY(0.0, 0.0, 0.0, 10.0, 10.0, gray)
        root = BvhNode.build([floor, Sphere(Vec3(5, 1, 5), 1.0, gray)])
        rec = root.hit(Ray(Vec3(2, 5, 2), Vec3(0, -1, 0)), 0.001, math.inf)
        assert rec is not None
        assert rec.t == pytest.approx(5.0)


class TestTraversal:
    """Tests for BvhNode.hit."""

    def test_matches_brute_force(self, gray):
        """The BVH returns the same closest hit as a flat list."""
        spheres = random_spheres(gray, 100, seed=6)
        root = BvhNode.build(spheres, rng=random.Random(4))
        flat = HittableList(spheres)

        rng = random.Random(7)
        hits = 0
        for _ in range(300):
            origin = Vec3(rng.uniform(-15, 15), rng.uniform(-15, 15), rng.uniform(-15, 15))
            direction = Vec3(rng.uniform(-1, 1), rng.uniform(-1, 1), rng.uniform(-1, 1))
            ray = Ray(origin, direction)
            expected = flat.hit(ray, 0.001, math.inf)
            actual = root.hit(ray, 0.001, math.inf)
            if expected is None:
                assert actual is None
            else:
                hits += 1
                assert actual is not None
                assert actual.t == pytest.approx(expected.t)
        assert hits > 0

    def test_box_miss_prunes(self, gray):
        """A ray that misses the root box returns None."""
        root = BvhNode.build(random_spheres(gray, 10, seed=8), rng=random.Random(5))
        ray = Ray(Vec3(100, 100, 100), Vec3(1, 0, 0))
        assert root.hit(ray, 0.001, math.inf) is None

    def test_respects_t_max(self, gray):
        """Hits beyond t_max are ignored."""
        root = BvhNode.build(
            [Sphere(Vec3(0, 0, -5), 1.0, gray), Sphere(Vec3(0, 0, -10), 1.0, gray)],
            rng=random.Random(0),
        )
        ray = Ray(Vec3(0, 0, 0), Vec3(0, 0, -1))
        assert root.hit(ray, 0.001, 3.0) is None
        assert root.hit(ray, 0.001, math.inf).t == pytest.approx(4.0)
