"""Scene module for scene assembly, configuration and demo scenes.

Components:
    scene: Scene container with the raytrace / par_raytrace entry points
    config: SceneConfig and dict-based scene import/export
    demo: Factory functions for the showcase and mesh scenes

Example:
    >>> from prism.scene import create_demo_scene
    >>> images = create_demo_scene(width=160, height=120).par_raytrace()
"""

from .config import (
    SceneConfig,
    scene_from_config,
    scene_from_dict,
    scene_to_config,
    scene_to_dict,
)
from .demo import DemoParams, create_demo_scene, create_mesh_scene, gradient_image
from .scene import Scene

__all__ = [
    # Scene container
    "Scene",
    # Configuration
    "SceneConfig",
    "scene_from_config",
    "scene_from_dict",
    "scene_to_config",
    "scene_to_dict",
    # Demo scenes
    "DemoParams",
    "create_demo_scene",
    "create_mesh_scene",
    "gradient_image",
]
