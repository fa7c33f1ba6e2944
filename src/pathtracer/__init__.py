"""Offline Monte Carlo path tracer.

This package renders scenes of geometric primitives by casting many randomly
jittered rays per pixel and tracing their interaction with the scene:
- Bounding volume hierarchy for fast nearest-hit queries
- Diffuse, metallic, dielectric and emissive materials
- Solid, checker and image textures
- Parallel per-pixel rendering on a worker thread pool

Subpackages:
    core: Vector algebra, rays, the path integrator and the render scheduler
    geometry: Bounding boxes, primitives, transforms and the BVH
    textures: Texture evaluation
    materials: Scattering and emission models
    camera: Thin-lens camera with depth of field and motion blur
    scene: Scene assembly and example scenes
    preview: Pixel conversion and image export
"""

__version__ = "0.1.0"
