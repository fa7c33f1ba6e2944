"""Scene module for scene assembly and demonstration scenes.

Components:
    manager: Scene container and the SceneManager registry of named
        textures, materials and primitives with dictionary round-tripping
    examples: Ready-made scenes and the SCENES registry
"""

from .examples import (
    SCENES,
    cornell_box_scene,
    earth_scene,
    random_spheres_scene,
    simple_light_scene,
    three_spheres_scene,
)
from .manager import Scene, SceneManager

__all__ = [
    "Scene",
    "SceneManager",
    "SCENES",
    "three_spheres_scene",
    "random_spheres_scene",
    "earth_scene",
    "simple_light_scene",
    "cornell_box_scene",
]
