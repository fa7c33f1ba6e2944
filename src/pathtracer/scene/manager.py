"""Scene assembly from named textures, materials and primitives.

The SceneManager is the high-level API for building worlds. Textures and
materials are registered under names so several primitives can share one
material instance; primitives reference their material by name. Every call
is also recorded as plain data, so a scene can be exported to a dictionary
(for JSON serialization) and rebuilt from it.

The SceneManager maintains:
- A name -> Texture registry
- A name -> Material registry
- The ordered list of primitives, optionally wrapped in a yaw rotation and a
  translation
- The configuration records needed to round-trip the scene

Example:
    >>> from pathtracer.scene.manager import SceneManager
    >>> scene = SceneManager()
    >>> scene.add_lambertian_material("red", albedo=(0.8, 0.3, 0.3))
    >>> scene.add_sphere((0, 0, -1), 0.5, "red")
    >>> world = scene.build_world()
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any

from pathtracer.camera.thin_lens import Camera
from pathtracer.core.integrator import Background, ConstantBackground
from pathtracer.core.vec3 import Color, Vec3
from pathtracer.geometry.box import Box
from pathtracer.geometry.bvh import BvhNode
from pathtracer.geometry.hittable import Hittable
from pathtracer.geometry.hittable_list import HittableList
from pathtracer.geometry.rect import PlaneX, PlaneY, PlaneZ
from pathtracer.geometry.sphere import MovingSphere, Sphere
from pathtracer.geometry.transform import Translate, YawRotation
from pathtracer.materials.base import Material
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.textures.base import Texture
from pathtracer.textures.checker import CheckerTexture
from pathtracer.textures.image import ImageTexture
from pathtracer.textures.solid_color import SolidColor

logger = logging.getLogger(__name__)

_PLANES = {"x": PlaneX, "y": PlaneY, "z": PlaneZ}


@dataclass
class Scene:
    """Everything the renderer needs besides image settings.

    Attributes:
        world: The scene root (usually a BvhNode).
        camera: The camera looking at the world.
        background: Radiance for rays that leave the scene.
        time0: Shutter open time the world was built for.
        time1: Shutter close time the world was built for.
    """

    world: Hittable
    camera: Camera
    background: Background = field(default_factory=ConstantBackground)
    time0: float = 0.0
    time1: float = 0.0


def _vec(values: Any) -> Vec3:
    return Vec3(*values)


class SceneManager:
    """Named registry of textures and materials plus an ordered primitive list.

    Attributes:
        textures: Registered textures by name.
        materials: Registered materials by name.
        primitives: The primitives added so far, transforms already applied.
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.textures: dict[str, Texture] = {}
        self.materials: dict[str, Material] = {}
        self.primitives: list[Hittable] = []
        self._texture_records: list[dict[str, Any]] = []
        self._material_records: list[dict[str, Any]] = []
        self._primitive_records: list[dict[str, Any]] = []

    def clear(self) -> None:
        """Remove all textures, materials and primitives."""
        self.textures.clear()
        self.materials.clear()
        self.primitives.clear()
        self._texture_records.clear()
        self._material_records.clear()
        self._primitive_records.clear()

    # =========================================================================
    # Texture Management
    # =========================================================================

    def _register_texture(self, name: str, texture: Texture, record: dict[str, Any]) -> Texture:
        if name in self.textures:
            raise ValueError(f"Texture {name!r} is already registered")
        self.textures[name] = texture
        self._texture_records.append({"name": name, **record})
        return texture

    def texture(self, name: str) -> Texture:
        """Look up a registered texture.

        Raises:
            ValueError: If no texture has that name.
        """
        try:
            return self.textures[name]
        except KeyError:
            raise ValueError(f"Unknown texture: {name!r}") from None

    def add_solid_color(self, name: str, color: tuple[float, float, float]) -> Texture:
        return self._register_texture(
            name, SolidColor(_vec(color)), {"type": "solid_color", "color": list(color)}
        )

    def add_checker_texture(self, name: str, odd: str, even: str) -> Texture:
        """Register a checker pattern alternating two registered textures.

        Args:
            name: Name of the new texture.
            odd: Name of the texture used in odd cells.
            even: Name of the texture used in even cells.

        Returns:
            The new texture.
        """
        checker = CheckerTexture(self.texture(odd), self.texture(even))
        return self._register_texture(name, checker, {"type": "checker", "odd": odd, "even": even})

    def add_image_texture(self, name: str, path: str) -> Texture:
        """Register a texture loaded from an image file.

        Raises:
            TextureLoadError: If the image cannot be read.
        """
        return self._register_texture(
            name, ImageTexture.load(path), {"type": "image", "path": str(path)}
        )

    # =========================================================================
    # Material Management
    # =========================================================================

    def _register_material(self, name: str, material: Material, record: dict[str, Any]) -> Material:
        if name in self.materials:
            raise ValueError(f"Material {name!r} is already registered")
        self.materials[name] = material
        self._material_records.append({"name": name, **record})
        return material

    def material(self, name: str) -> Material:
        """Look up a registered material.

        Raises:
            ValueError: If no material has that name.
        """
        try:
            return self.materials[name]
        except KeyError:
            raise ValueError(f"Unknown material: {name!r}") from None

    def _color_or_texture(
        self,
        color: tuple[float, float, float] | None,
        texture: str | None,
        record: dict[str, Any],
    ) -> Texture | Color:
        if (color is None) == (texture is None):
            raise ValueError("Exactly one of a color or a texture name must be given")
        if texture is not None:
            record["texture"] = texture
            return self.texture(texture)
        record["color"] = list(color)
        return _vec(color)

    def add_lambertian_material(
        self,
        name: str,
        albedo: tuple[float, float, float] | None = None,
        texture: str | None = None,
    ) -> Material:
        """Register a diffuse material colored by a constant or a texture.

        Args:
            name: Name of the new material.
            albedo: Constant diffuse reflectance as (R, G, B).
            texture: Name of a registered texture to use instead of ``albedo``.

        Returns:
            The new material.

        Raises:
            ValueError: If both or neither of ``albedo`` and ``texture`` are
                given, or the texture is unknown.
        """
        record: dict[str, Any] = {"type": "lambertian"}
        source = self._color_or_texture(albedo, texture, record)
        return self._register_material(name, Lambertian(source), record)

    def add_metal_material(
        self,
        name: str,
        albedo: tuple[float, float, float],
        roughness: float = 0.0,
    ) -> Material:
        record = {"type": "metal", "albedo": list(albedo), "roughness": roughness}
        return self._register_material(name, Metal(_vec(albedo), roughness), record)

    def add_dielectric_material(self, name: str, refraction_index: float = 1.5) -> Material:
        record = {"type": "dielectric", "refraction_index": refraction_index}
        return self._register_material(name, Dielectric(refraction_index), record)

    def add_diffuse_light_material(
        self,
        name: str,
        emit: tuple[float, float, float] | None = None,
        texture: str | None = None,
    ) -> Material:
        """Register an emissive material.

        Args:
            name: Name of the new material.
            emit: Constant emitted radiance as (R, G, B). May exceed 1.0.
            texture: Name of a registered texture to use instead of ``emit``.

        Returns:
            The new material.
        """
        record: dict[str, Any] = {"type": "diffuse_light"}
        source = self._color_or_texture(emit, texture, record)
        return self._register_material(name, DiffuseLight(source), record)

    # =========================================================================
    # Primitive Management
    # =========================================================================

    def _add_primitive(
        self,
        primitive: Hittable,
        record: dict[str, Any],
        rotate_y: float,
        translate: tuple[float, float, float] | None,
    ) -> Hittable:
        if rotate_y:
            primitive = YawRotation(primitive, rotate_y)
            record["rotate_y"] = rotate_y
        if translate is not None:
            primitive = Translate(primitive, _vec(translate))
            record["translate"] = list(translate)
        self.primitives.append(primitive)
        self._primitive_records.append(record)
        return primitive

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        material: str,
        *,
        rotate_y: float = 0.0,
        translate: tuple[float, float, float] | None = None,
    ) -> Hittable:
        """Add a stationary sphere.

        Args:
            center: The center point of the sphere as (x, y, z).
            radius: The radius of the sphere.
            material: Name of a registered material.
            rotate_y: Optional rotation about the Y axis in degrees.
            translate: Optional offset applied after the rotation.

        Returns:
            The added primitive, including any transform wrappers.
        """
        sphere = Sphere(_vec(center), radius, self.material(material))
        record = {"type": "sphere", "center": list(center), "radius": radius, "material": material}
        return self._add_primitive(sphere, record, rotate_y, translate)

    def add_moving_sphere(
        self,
        center0: tuple[float, float, float],
        center1: tuple[float, float, float],
        time0: float,
        time1: float,
        radius: float,
        material: str,
        *,
        rotate_y: float = 0.0,
        translate: tuple[float, float, float] | None = None,
    ) -> Hittable:
        sphere = MovingSphere(
            _vec(center0), _vec(center1), time0, time1, radius, self.material(material)
        )
        record = {
            "type": "moving_sphere",
            "center0": list(center0),
            "center1": list(center1),
            "time0": time0,
            "time1": time1,
            "radius": radius,
            "material": material,
        }
        return self._add_primitive(sphere, record, rotate_y, translate)

    def add_plane(
        self,
        axis: str,
        corner: tuple[float, float, float],
        extent_a: float,
        extent_b: float,
        material: str,
        *,
        rotate_y: float = 0.0,
        translate: tuple[float, float, float] | None = None,
    ) -> Hittable:
        """Add an axis-aligned rectangle.

        Args:
            axis: The fixed axis, one of "x", "y" or "z".
            corner: The lower corner of the rectangle as (x, y, z).
            extent_a: Side length along the first spanned axis.
            extent_b: Side length along the second spanned axis.
            material: Name of a registered material.
            rotate_y: Optional rotation about the Y axis in degrees.
            translate: Optional offset applied after the rotation.

        Returns:
            The added primitive, including any transform wrappers.

        Raises:
            ValueError: If the axis name is unknown.
        """
        plane_cls = _PLANES.get(axis.lower())
        if plane_cls is None:
            raise ValueError(f"Unknown plane axis: {axis!r}")
        plane = plane_cls(*corner, extent_a, extent_b, self.material(material))
        record = {
            "type": "plane",
            "axis": axis.lower(),
            "corner": list(corner),
            "extent": [extent_a, extent_b],
            "material": material,
        }
        return self._add_primitive(plane, record, rotate_y, translate)

    def add_box(
        self,
        p0: tuple[float, float, float],
        p1: tuple[float, float, float],
        material: str,
        *,
        rotate_y: float = 0.0,
        translate: tuple[float, float, float] | None = None,
    ) -> Hittable:
        box = Box(_vec(p0), _vec(p1), self.material(material))
        record = {"type": "box", "p0": list(p0), "p1": list(p1), "material": material}
        return self._add_primitive(box, record, rotate_y, translate)

    # =========================================================================
    # World Construction
    # =========================================================================

    def get_primitive_count(self) -> int:
        """Get the total number of primitives in the scene."""
        return len(self.primitives)

    def build_world(
        self,
        use_bvh: bool = True,
        time0: float = 0.0,
        time1: float = 0.0,
        rng: random.Random | None = None,
    ) -> Hittable:
        """Assemble the primitives into a single scene root.

        Args:
            use_bvh: Build a BvhNode when True, a flat HittableList otherwise.
            time0: Shutter open time used for bounding boxes.
            time1: Shutter close time used for bounding boxes.
            rng: Random generator for BVH split axes.

        Returns:
            The scene root. An empty scene always yields an empty
            HittableList.

        Raises:
            BoundingBoxError: If ``use_bvh`` is set and a primitive has no
                bounding box.
        """
        if not self.primitives:
            logger.warning("Building an empty world")
            return HittableList()
        if not use_bvh:
            return HittableList(self.primitives)
        logger.info("Building BVH over %d primitives", len(self.primitives))
        return BvhNode.build(self.primitives, time0, time1, rng=rng)

    def to_scene(
        self,
        camera: Camera,
        background: Background | None = None,
        use_bvh: bool = True,
        rng: random.Random | None = None,
    ) -> Scene:
        """Build the world for the camera's shutter interval and bundle a Scene."""
        world = self.build_world(use_bvh, camera.time0, camera.time1, rng=rng)
        return Scene(
            world=world,
            camera=camera,
            background=background if background is not None else ConstantBackground(),
            time0=camera.time0,
            time1=camera.time1,
        )

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization).

        Returns:
            A dictionary with 'textures', 'materials' and 'primitives' lists.
        """
        return {
            "textures": [dict(record) for record in self._texture_records],
            "materials": [dict(record) for record in self._material_records],
            "primitives": [dict(record) for record in self._primitive_records],
        }

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary, replacing the current contents.

        Args:
            data: Dictionary with 'textures', 'materials' and 'primitives'
                keys. Missing keys are treated as empty lists.

        Raises:
            ValueError: If an entry has an unknown type or references an
                unknown texture or material.
        """
        self.clear()

        for tex in data.get("textures", []):
            tex_type = tex.get("type", "").lower()
            name = tex["name"]
            if tex_type == "solid_color":
                self.add_solid_color(name, tuple(tex["color"]))
            elif tex_type == "checker":
                self.add_checker_texture(name, tex["odd"], tex["even"])
            elif tex_type == "image":
                self.add_image_texture(name, tex["path"])
            else:
                raise ValueError(f"Unknown texture type: {tex_type}")

        for mat in data.get("materials", []):
            mat_type = mat.get("type", "").lower()
            name = mat["name"]
            color = tuple(mat["color"]) if "color" in mat else None
            if mat_type == "lambertian":
                self.add_lambertian_material(name, color, mat.get("texture"))
            elif mat_type == "metal":
                self.add_metal_material(name, tuple(mat["albedo"]), mat.get("roughness", 0.0))
            elif mat_type == "dielectric":
                self.add_dielectric_material(name, mat.get("refraction_index", 1.5))
            elif mat_type == "diffuse_light":
                self.add_diffuse_light_material(name, color, mat.get("texture"))
            else:
                raise ValueError(f"Unknown material type: {mat_type}")

        for prim in data.get("primitives", []):
            prim_type = prim.get("type", "").lower()
            transforms = {
                "rotate_y": prim.get("rotate_y", 0.0),
                "translate": tuple(prim["translate"]) if "translate" in prim else None,
            }
            if prim_type == "sphere":
                self.add_sphere(
                    tuple(prim["center"]), prim["radius"], prim["material"], **transforms
                )
            elif prim_type == "moving_sphere":
                self.add_moving_sphere(
                    tuple(prim["center0"]),
                    tuple(prim["center1"]),
                    prim["time0"],
                    prim["time1"],
                    prim["radius"],
                    prim["material"],
                    **transforms,
                )
            elif prim_type == "plane":
                extent_a, extent_b = prim["extent"]
                self.add_plane(
                    prim["axis"],
                    tuple(prim["corner"]),
                    extent_a,
                    extent_b,
                    prim["material"],
                    **transforms,
                )
            elif prim_type == "box":
                self.add_box(
                    tuple(prim["p0"]), tuple(prim["p1"]), prim["material"], **transforms
                )
            else:
                raise ValueError(f"Unknown primitive type: {prim_type}")

        logger.debug(
            "Loaded scene with %d textures, %d materials and %d primitives",
            len(self.textures),
            len(self.materials),
            len(self.primitives),
        )
