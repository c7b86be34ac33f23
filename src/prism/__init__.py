"""Recursive (Whitted-style) CPU ray tracer.

This package renders raster images by casting rays through a scene and
recursively evaluating direct illumination, shadows, reflection and
refraction at every surface hit. It provides:
- Sphere, plane, triangle and triangle-mesh primitives with affine transforms
- Point and directional lights with shadow rays
- Diffuse, reflective and refractive (Fresnel) materials with textures
- Column-parallel image synthesis over a process pool

Subpackages:
    core: Vector helpers, rays, matrices, transforms, shading and rendering
    camera: Look-at pinhole camera and raster view
    geometry: Shape primitives and intersection algorithms
    lights: Point and directional light sources
    materials: Textures, materials and surface responses
    scene: Scene container, configuration loading and demo scenes
    io: Mesh file readers
    preview: Tone mapping, PNG export and interactive viewing
"""

__version__ = "0.1.0"

# core goes first: the integrator it loads depends on prism.materials
from prism.core import Matrix4, Transform, rgb
from prism.camera import Camera, View
from prism.geometry import MeshDescription, Plane, ShadingMode, Sphere, Triangle, TriangleMesh
from prism.lights import DirectionalLight, PointLight
from prism.materials import Checker, Diffuse, ImageTexture, Material, Reflective, Refractive
from prism.scene import Scene

__all__ = [
    "Camera",
    "Checker",
    "Diffuse",
    "DirectionalLight",
    "ImageTexture",
    "Material",
    "Matrix4",
    "MeshDescription",
    "Plane",
    "PointLight",
    "Reflective",
    "Refractive",
    "Scene",
    "ShadingMode",
    "Sphere",
    "Transform",
    "Triangle",
    "TriangleMesh",
    "View",
    "rgb",
]
