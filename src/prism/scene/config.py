"""Dictionary-based scene configuration.

SceneConfig mirrors a Scene as plain data (lists, dicts, numbers and
strings) so that scenes can be stored as JSON and rebuilt later. Shapes
refer to materials by index into the shared materials list, and every
variant (light, shape, texture, surface) is tagged by a "type" key.

Shape transforms are applied to world-space geometry when they happen, so
exported shapes carry their transformed geometry and no matrices.

Example:
    >>> from prism.scene.config import scene_from_dict
    >>> scene = scene_from_dict({
    ...     "view": {"width": 320, "height": 240},
    ...     "cameras": [{"origin": [0, 0, -20], "look_at": [0, 0, 0], "fov": 70}],
    ...     "lights": [{"type": "point", "position": [0, 10, 0]}],
    ...     "materials": [{"texture": {"type": "color", "color": [1, 0, 0]}}],
    ...     "shapes": [{"type": "sphere", "center": [0, 0, 0], "radius": 2, "material_id": 0}],
    ... })
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from prism.camera.pinhole import Camera, View
from prism.core.integrator import DEFAULT_MAX_GENERATIONS
from prism.geometry.mesh import MeshDescription, ShadingMode, TriangleMesh
from prism.geometry.plane import Plane
from prism.geometry.shape import Shape
from prism.geometry.sphere import Sphere
from prism.geometry.triangle import Triangle
from prism.lights import DirectionalLight, Light, PointLight
from prism.materials import (
    Checker,
    ColorTexture,
    Diffuse,
    ImageTexture,
    Material,
    Reflective,
    Refractive,
    Surface,
    Texture,
)
from prism.scene.scene import Scene

logger = logging.getLogger(__name__)


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        view: Raster size, {"width": ..., "height": ...}.
        background: Background RGB color.
        max_generations: Recursion bound.
        cameras: List of camera configurations.
        lights: List of light configurations.
        materials: List of material configurations.
        shapes: List of shape configurations referencing materials by index.
    """

    view: dict[str, int] = field(default_factory=lambda: {"width": 800, "height": 600})
    background: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    max_generations: int = DEFAULT_MAX_GENERATIONS
    cameras: list[dict[str, Any]] = field(default_factory=list)
    lights: list[dict[str, Any]] = field(default_factory=list)
    materials: list[dict[str, Any]] = field(default_factory=list)
    shapes: list[dict[str, Any]] = field(default_factory=list)


# =============================================================================
# Export
# =============================================================================


def _texture_to_dict(texture: Texture) -> dict[str, Any]:
    if isinstance(texture, ColorTexture):
        return {"type": "color", "color": texture.rgb.tolist()}
    if isinstance(texture, Checker):
        return {
            "type": "checker",
            "primary": texture.primary.tolist(),
            "secondary": texture.secondary.tolist(),
        }
    if isinstance(texture, ImageTexture):
        if texture.source is not None:
            return {"type": "image", "path": texture.source}
        return {"type": "image", "pixels": texture.pixels.tolist()}
    raise ValueError(f"Unknown texture type: {type(texture).__name__}")


def _surface_to_dict(surface: Surface) -> dict[str, Any]:
    if isinstance(surface, Diffuse):
        return {"type": "diffuse"}
    if isinstance(surface, Reflective):
        return {"type": "reflective", "reflectivity": surface.reflectivity}
    if isinstance(surface, Refractive):
        return {"type": "refractive", "index": surface.index, "transparency": surface.transparency}
    raise ValueError(f"Unknown surface type: {type(surface).__name__}")


def _material_to_dict(material: Material) -> dict[str, Any]:
    return {
        "texture": _texture_to_dict(material.texture),
        "albedo": material.albedo,
        "surface": _surface_to_dict(material.surface),
        "scale": material.scale,
    }


def _light_to_dict(light: Light) -> dict[str, Any]:
    if isinstance(light, PointLight):
        return {
            "type": "point",
            "position": light.position.tolist(),
            "intensity": light.intensity,
            "color": light.color.tolist(),
        }
    if isinstance(light, DirectionalLight):
        return {
            "type": "directional",
            "direction": light.direction.tolist(),
            "intensity": light.intensity,
            "color": light.color.tolist(),
        }
    raise ValueError(f"Unknown light type: {type(light).__name__}")


def _shape_to_dict(shape: Shape, material_id: int) -> dict[str, Any]:
    if isinstance(shape, Sphere):
        data = {"type": "sphere", "center": shape.center.tolist(), "radius": shape.radius}
    elif isinstance(shape, Plane):
        data = {"type": "plane", "point": shape.point.tolist(), "normal": shape.normal.tolist()}
    elif isinstance(shape, Triangle):
        data = {
            "type": "triangle",
            "p1": shape.p1.tolist(),
            "p2": shape.p2.tolist(),
            "p3": shape.p3.tolist(),
            "two_sided": shape.two_sided,
        }
    elif isinstance(shape, TriangleMesh):
        data = {
            "type": "mesh",
            "positions": shape.positions.tolist(),
            "faces": [list(face) for face in shape.faces],
            "uvs": shape.uvs.tolist(),
            "shading": shape.shading.value,
            "two_sided": shape.two_sided,
        }
    else:
        raise ValueError(f"Unknown shape type: {type(shape).__name__}")
    data["material_id"] = material_id
    return data


def scene_to_config(scene: Scene) -> SceneConfig:
    """Export a scene to a configuration object.

    Materials shared by several shapes are exported once.
    """
    config = SceneConfig(
        view={"width": scene.view.width, "height": scene.view.height},
        background=scene.background.tolist(),
        max_generations=scene.max_generations,
    )
    for camera in scene.cameras:
        config.cameras.append(
            {"origin": camera.origin.tolist(), "look_at": camera.target.tolist(), "fov": camera.fov}
        )
    for light in scene.lights:
        config.lights.append(_light_to_dict(light))

    material_ids: dict[int, int] = {}
    for shape in scene.shapes:
        key = id(shape.material)
        if key not in material_ids:
            material_ids[key] = len(config.materials)
            config.materials.append(_material_to_dict(shape.material))
        config.shapes.append(_shape_to_dict(shape, material_ids[key]))
    return config


def scene_to_dict(scene: Scene) -> dict[str, Any]:
    """Export a scene to a dictionary (for JSON serialization)."""
    config = scene_to_config(scene)
    return {
        "view": config.view,
        "background": config.background,
        "max_generations": config.max_generations,
        "cameras": config.cameras,
        "lights": config.lights,
        "materials": config.materials,
        "shapes": config.shapes,
    }


# =============================================================================
# Import
# =============================================================================


def _texture_from_dict(data: dict[str, Any]) -> Texture:
    tex_type = data.get("type", "color").lower()
    if tex_type == "color":
        return ColorTexture(data.get("color", [0.0, 0.9, 0.2]))
    if tex_type == "checker":
        return Checker(data.get("primary", [0.0, 1.0, 0.0]), data.get("secondary"))
    if tex_type == "image":
        if "path" in data:
            return ImageTexture.open(data["path"])
        if "pixels" in data:
            return ImageTexture(np.asarray(data["pixels"], dtype=np.float64))
        raise ValueError("Image texture needs a 'path' or 'pixels' entry")
    raise ValueError(f"Unknown texture type: {tex_type}")


def _surface_from_dict(data: dict[str, Any]) -> Surface:
    surface_type = data.get("type", "diffuse").lower()
    if surface_type == "diffuse":
        return Diffuse()
    if surface_type == "reflective":
        return Reflective(data.get("reflectivity", 1.0))
    if surface_type == "refractive":
        return Refractive(data.get("index", 1.5), data.get("transparency", 1.0))
    raise ValueError(f"Unknown surface type: {surface_type}")


def _material_from_dict(data: dict[str, Any]) -> Material:
    return Material(
        _texture_from_dict(data.get("texture", {})),
        albedo=data.get("albedo", 1.0),
        surface=_surface_from_dict(data.get("surface", {})),
        scale=data.get("scale", 1.0),
    )


def _light_from_dict(data: dict[str, Any]) -> Light:
    light_type = data.get("type", "").lower()
    if light_type == "point":
        return PointLight(
            data.get("position", [0.0, 0.0, 0.0]),
            intensity=data.get("intensity", 3000.0),
            color=data.get("color", [1.0, 1.0, 1.0]),
        )
    if light_type == "directional":
        return DirectionalLight(
            data.get("direction", [0.0, -1.0, 0.0]),
            intensity=data.get("intensity", 1.0),
            color=data.get("color", [1.0, 1.0, 1.0]),
        )
    raise ValueError(f"Unknown light type: {light_type}")


def _shape_from_dict(data: dict[str, Any], materials: list[Material]) -> Shape:
    material_id = data.get("material_id")
    material = None
    if material_id is not None:
        if not 0 <= material_id < len(materials):
            raise ValueError(f"Shape references material {material_id}, but only {len(materials)} are defined")
        material = materials[material_id]

    shape_type = data.get("type", "").lower()
    if shape_type == "sphere":
        return Sphere(data.get("center", [0.0, 0.0, 0.0]), data.get("radius", 1.0), material)
    if shape_type == "plane":
        return Plane(data.get("point", [0.0, 0.0, 0.0]), data.get("normal", [0.0, 1.0, 0.0]), material)
    if shape_type == "triangle":
        return Triangle(
            data["p1"], data["p2"], data["p3"], material, two_sided=data.get("two_sided", False)
        )
    if shape_type == "mesh":
        if "path" in data:
            from prism.io.geo import load_geo

            description = load_geo(data["path"])
        else:
            description = MeshDescription(
                positions=data["positions"], faces=data["faces"], uvs=data.get("uvs")
            )
        return TriangleMesh(
            description,
            material,
            shading=ShadingMode(data.get("shading", "flat")),
            two_sided=data.get("two_sided", False),
        )
    raise ValueError(f"Unknown shape type: {shape_type}")


def scene_from_config(config: SceneConfig) -> Scene:
    """Build a scene from a configuration object.

    Raises:
        ValueError: If the configuration contains an unknown type or invalid
            values.
        prism.errors.RaytracerError: If a shape cannot be constructed.
    """
    scene = Scene()
    scene.set_view(View(config.view.get("width", 800), config.view.get("height", 600)))
    scene.set_background(config.background)
    scene.set_max_generations(config.max_generations)

    for camera in config.cameras:
        scene.add_camera(
            Camera(
                camera.get("origin", [0.0, 0.0, -20.0]),
                camera.get("look_at", [0.0, 0.0, 0.0]),
                camera.get("fov", 70.0),
            )
        )
    for light in config.lights:
        scene.add_light(_light_from_dict(light))

    materials = [_material_from_dict(m) for m in config.materials]
    for shape in config.shapes:
        scene.add_shape(_shape_from_dict(shape, materials))

    logger.debug("Loaded %r from configuration", scene)
    return scene


def scene_from_dict(data: dict[str, Any]) -> Scene:
    """Build a scene from a dictionary.

    Args:
        data: Dictionary with optional 'view', 'background',
            'max_generations', 'cameras', 'lights', 'materials' and 'shapes'
            keys.
    """
    config = SceneConfig(
        view=data.get("view", {"width": 800, "height": 600}),
        background=data.get("background", [0.0, 0.0, 0.0]),
        max_generations=data.get("max_generations", DEFAULT_MAX_GENERATIONS),
        cameras=data.get("cameras", []),
        lights=data.get("lights", []),
        materials=data.get("materials", []),
        shapes=data.get("shapes", []),
    )
    return scene_from_config(config)
