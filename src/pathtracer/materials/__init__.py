"""Materials module for light scattering models.

Components:
    base: Material interface and ScatterResult
    lambertian: Ideal diffuse reflection
    metal: Specular reflection with optional roughness
    dielectric: Glass-like materials with refraction (Schlick reflectance)
    diffuse_light: Emissive surfaces

Each material provides:
    - scatter(): Sample a scattered ray and its attenuation, or absorb
    - emitted(): Radiance emitted by the surface itself
"""

from .base import Material, ScatterResult
from .dielectric import Dielectric
from .diffuse_light import DiffuseLight
from .lambertian import Lambertian
from .metal import Metal

__all__ = [
    "Material",
    "ScatterResult",
    "Lambertian",
    "Metal",
    "Dielectric",
    "DiffuseLight",
]
