"""Ready-made demonstration scenes.

Each factory returns a complete Scene (world, camera and background) built
through the SceneManager:

    three_spheres: diffuse, glass and fuzzy metal spheres on a large ground
        sphere under a sky gradient
    random_spheres: the classic field of small random spheres around three
        large ones, with the diffuse ones bouncing during the shutter interval
    earth: a single globe textured with an equirectangular earth map
    simple_light: a checkered sphere lit only by a rectangular area light
    cornell_box: the Cornell box with two rotated boxes and a ceiling light

The classic Cornell box dimensions are 555x555x555 units, with the camera
positioned outside looking in through the open front.

Example:
    >>> from pathtracer.scene.examples import SCENES
    >>> scene = SCENES["cornell_box"](aspect_ratio=1.0)
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from pathlib import Path

from pathtracer.camera.thin_lens import Camera
from pathtracer.core.integrator import ConstantBackground, SkyGradient
from pathtracer.core.ray import random_vec3
from pathtracer.core.vec3 import Vec3
from pathtracer.scene.manager import Scene, SceneManager

logger = logging.getLogger(__name__)

DEFAULT_ASPECT_RATIO = 16.0 / 9.0

# Shared camera placement of the outdoor scenes
OUTDOOR_LOOKFROM = Vec3(13.0, 2.0, 3.0)
OUTDOOR_LOOKAT = Vec3(0.0, 0.0, 0.0)
OUTDOOR_VFOV = 20.0
OUTDOOR_APERTURE = 0.1
OUTDOOR_FOCUS_DIST = 10.0

DEFAULT_EARTH_TEXTURE = Path("images") / "earthmap.jpg"

# =============================================================================
# Cornell Box Parameters
# =============================================================================

BOX_SIZE = 555.0

RED_WALL_ALBEDO = (0.65, 0.05, 0.05)
GREEN_WALL_ALBEDO = (0.12, 0.45, 0.15)
WHITE_WALL_ALBEDO = (0.73, 0.73, 0.73)
LIGHT_EMISSION = (15.0, 15.0, 15.0)


def _outdoor_camera(aspect_ratio: float, time0: float = 0.0, time1: float = 0.0) -> Camera:
    return Camera(
        lookfrom=OUTDOOR_LOOKFROM,
        lookat=OUTDOOR_LOOKAT,
        vup=Vec3(0.0, 1.0, 0.0),
        vfov=OUTDOOR_VFOV,
        aspect_ratio=aspect_ratio,
        aperture=OUTDOOR_APERTURE,
        focus_dist=OUTDOOR_FOCUS_DIST,
        time0=time0,
        time1=time1,
    )


def three_spheres_scene(aspect_ratio: float = DEFAULT_ASPECT_RATIO) -> Scene:
    """Create three spheres resting on a huge ground sphere."""
    scene = SceneManager()
    scene.add_lambertian_material("ground", albedo=(0.8, 0.8, 0.0))
    scene.add_lambertian_material("center", albedo=(0.7, 0.3, 0.3))
    scene.add_dielectric_material("left", refraction_index=1.7)
    scene.add_metal_material("right", albedo=(0.8, 0.6, 0.2), roughness=1.0)

    scene.add_sphere((0.0, 0.0, -1.0), 0.5, "center")
    scene.add_sphere((0.0, -100.5, -1.0), 100.0, "ground")
    scene.add_sphere((-1.0, 0.0, -1.0), 0.5, "left")
    scene.add_sphere((1.0, 0.0, -1.0), 0.5, "right")

    return scene.to_scene(_outdoor_camera(aspect_ratio), SkyGradient(), rng=random.Random(0))


def random_spheres_scene(
    aspect_ratio: float = DEFAULT_ASPECT_RATIO,
    seed: int = 1,
    time0: float = 0.0,
    time1: float = 1.0,
) -> Scene:
    """Create the random sphere field.

    Placement uses its own generator seeded with ``seed``, so the layout is
    reproducible and independent of the render seed.

    Args:
        aspect_ratio: Width divided by height of the output image.
        seed: Seed of the placement generator.
        time0: Shutter open time. Diffuse spheres start moving here.
        time1: Shutter close time.

    Returns:
        The scene, with the world built as a BVH over the shutter interval.
    """
    rng = random.Random(seed)
    scene = SceneManager()

    scene.add_solid_color("checker_odd", (0.2, 0.3, 0.1))
    scene.add_solid_color("checker_even", (0.9, 0.9, 0.9))
    scene.add_checker_texture("checker", "checker_odd", "checker_even")
    scene.add_lambertian_material("ground", texture="checker")
    scene.add_sphere((0.0, -1000.0, 0.0), 1000.0, "ground")

    glass_added = False
    keep_clear = Vec3(4.0, 0.2, 0.0)
    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Vec3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - keep_clear).length() <= 0.9:
                continue

            name = f"sphere_{a}_{b}"
            if choose_mat < 0.8:
                albedo = random_vec3(rng) * random_vec3(rng)
                scene.add_lambertian_material(name, albedo=tuple(albedo))
                center1 = center + Vec3(0.0, rng.uniform(0.0, 0.5), 0.0)
                scene.add_moving_sphere(
                    tuple(center), tuple(center1), time0, time1, 0.2, name
                )
            elif choose_mat < 0.95:
                albedo = random_vec3(rng, 0.5, 1.0)
                roughness = rng.uniform(0.0, 0.5)
                scene.add_metal_material(name, albedo=tuple(albedo), roughness=roughness)
                scene.add_sphere(tuple(center), 0.2, name)
            else:
                if not glass_added:
                    scene.add_dielectric_material("glass", refraction_index=1.5)
                    glass_added = True
                scene.add_sphere(tuple(center), 0.2, "glass")

    if not glass_added:
        scene.add_dielectric_material("glass", refraction_index=1.5)
    scene.add_sphere((0.0, 1.0, 0.0), 1.0, "glass")
    scene.add_lambertian_material("large_diffuse", albedo=(0.4, 0.2, 0.1))
    scene.add_sphere((-4.0, 1.0, 0.0), 1.0, "large_diffuse")
    scene.add_metal_material("large_metal", albedo=(0.7, 0.6, 0.5), roughness=0.0)
    scene.add_sphere((4.0, 1.0, 0.0), 1.0, "large_metal")

    logger.info("Random sphere field has %d primitives", scene.get_primitive_count())
    camera = _outdoor_camera(aspect_ratio, time0, time1)
    return scene.to_scene(camera, SkyGradient(), rng=random.Random(seed))


def earth_scene(
    aspect_ratio: float = DEFAULT_ASPECT_RATIO,
    texture_path: str | Path = DEFAULT_EARTH_TEXTURE,
) -> Scene:
    """Create a globe wrapped in an image texture.

    Raises:
        TextureLoadError: If the texture image cannot be read.
    """
    scene = SceneManager()
    scene.add_image_texture("earth", str(texture_path))
    scene.add_lambertian_material("earth_surface", texture="earth")
    scene.add_sphere((0.0, 0.0, 0.0), 2.0, "earth_surface")
    return scene.to_scene(_outdoor_camera(aspect_ratio), SkyGradient(), rng=random.Random(0))


def simple_light_scene(aspect_ratio: float = DEFAULT_ASPECT_RATIO) -> Scene:
    """Create a checkered sphere on checkered ground lit by one area light.

    The background is black, so the rectangle is the only light source.
    """
    scene = SceneManager()
    scene.add_solid_color("dark", (0.2, 0.3, 0.1))
    scene.add_solid_color("light", (0.9, 0.9, 0.9))
    scene.add_checker_texture("checker", "dark", "light")
    scene.add_lambertian_material("checkered", texture="checker")
    scene.add_diffuse_light_material("lamp", emit=(4.0, 4.0, 4.0))

    scene.add_sphere((0.0, -1000.0, 0.0), 1000.0, "checkered")
    scene.add_sphere((0.0, 2.0, 0.0), 2.0, "checkered")
    # 2x2 light facing the sphere, spanning x=[3, 5] and y=[1, 3]
    scene.add_plane("z", (3.0, 1.0, -2.0), 2.0, 2.0, "lamp")

    camera = Camera(
        lookfrom=Vec3(26.0, 3.0, 6.0),
        lookat=Vec3(0.0, 2.0, 0.0),
        vup=Vec3(0.0, 1.0, 0.0),
        vfov=20.0,
        aspect_ratio=aspect_ratio,
    )
    return scene.to_scene(camera, ConstantBackground(), rng=random.Random(0))


def cornell_box_scene(aspect_ratio: float = 1.0, box_size: float = BOX_SIZE) -> Scene:
    """Create the Cornell box.

    Five walls form a box open toward the camera: green on the left and red
    on the right as seen from the camera, with a white floor, ceiling and
    back wall. A 130x105 light sits just below the ceiling. Two white boxes
    stand on the floor, rotated about the Y axis in opposite directions. All
    sizes are given for a 555 room and scale with ``box_size``.

    Args:
        aspect_ratio: Width divided by height of the output image.
        box_size: Side length of the room.

    Returns:
        The scene with a black background.
    """
    scene = SceneManager()
    scene.add_lambertian_material("red", albedo=RED_WALL_ALBEDO)
    scene.add_lambertian_material("green", albedo=GREEN_WALL_ALBEDO)
    scene.add_lambertian_material("white", albedo=WHITE_WALL_ALBEDO)
    scene.add_diffuse_light_material("light", emit=LIGHT_EMISSION)

    s = box_size
    scene.add_plane("x", (s, 0.0, 0.0), s, s, "green")  # Left wall in the image
    scene.add_plane("x", (0.0, 0.0, 0.0), s, s, "red")  # Right wall in the image
    scene.add_plane("y", (0.0, 0.0, 0.0), s, s, "white")  # Floor
    scene.add_plane("y", (0.0, s, 0.0), s, s, "white")  # Ceiling
    scene.add_plane("z", (0.0, 0.0, s), s, s, "white")  # Back wall

    scale = s / BOX_SIZE

    # Light sits just below the ceiling to avoid z-fighting
    light_width = 130.0 * scale
    light_depth = 105.0 * scale
    scene.add_plane(
        "y",
        ((s - light_width) / 2.0, s - 1.0 * scale, (s - light_depth) / 2.0),
        light_width,
        light_depth,
        "light",
    )

    scene.add_box(
        (0.0, 0.0, 0.0),
        (165.0 * scale, 330.0 * scale, 165.0 * scale),
        "white",
        rotate_y=15.0,
        translate=(265.0 * scale, 0.0, 295.0 * scale),
    )
    scene.add_box(
        (0.0, 0.0, 0.0),
        (165.0 * scale, 165.0 * scale, 165.0 * scale),
        "white",
        rotate_y=-18.0,
        translate=(130.0 * scale, 0.0, 65.0 * scale),
    )

    camera = Camera(
        lookfrom=Vec3(s / 2.0, s / 2.0, -800.0 * scale),
        lookat=Vec3(s / 2.0, s / 2.0, 0.0),
        vup=Vec3(0.0, 1.0, 0.0),
        vfov=40.0,
        aspect_ratio=aspect_ratio,
    )
    return scene.to_scene(camera, ConstantBackground(), rng=random.Random(0))


SCENES: dict[str, Callable[..., Scene]] = {
    "three_spheres": three_spheres_scene,
    "random_spheres": random_spheres_scene,
    "earth": earth_scene,
    "simple_light": simple_light_scene,
    "cornell_box": cornell_box_scene,
}
